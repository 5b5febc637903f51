"""Domain models for property listings."""

from listing_flows.models.base import (
    FlowValidationResult,
    ListingCompleteness,
    PropertyRecord,
    StepIds,
    ValidationResult,
)
from listing_flows.models.enums import FieldKind, FlowCategory, FlowType, ListingType

__all__ = [
    "FieldKind",
    "FlowCategory",
    "FlowType",
    "FlowValidationResult",
    "ListingCompleteness",
    "ListingType",
    "PropertyRecord",
    "StepIds",
    "ValidationResult",
]
