"""Flow detection, field validation and display formatting for property listings."""

__version__ = "0.1.0"
