"""Custom exception hierarchy for listing-flows."""


class ListingFlowsError(Exception):
    """Base exception for all listing-flows errors."""


class RecordParseError(ListingFlowsError):
    """Raised when a property record's details cannot be parsed."""


class UnknownFlowError(ListingFlowsError):
    """Raised when a flow type string is not one of the known flows."""


class ConfigurationError(ListingFlowsError):
    """Raised when configuration is invalid or missing."""


class SinkError(ListingFlowsError):
    """Raised when a sink operation fails."""
