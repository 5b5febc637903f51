"""Output sinks for exporting listings and audit reports."""

from listing_flows.sinks.console import ConsoleSink
from listing_flows.sinks.json_file import JsonFileSink

__all__ = ["ConsoleSink", "JsonFileSink"]
