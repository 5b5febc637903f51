"""Field and step validation for the listing wizard."""

from listing_flows.validation.rules import BATHROOMS_REQUIRED_STEPS, FIELD_RULES, FieldRule
from listing_flows.validation.steps import STEP_REQUIRED_FIELDS
from listing_flows.validation.validator import (
    FieldValidator,
    step_completion,
    validate_all_steps,
    validate_field,
    validate_step,
)

__all__ = [
    "BATHROOMS_REQUIRED_STEPS",
    "FIELD_RULES",
    "FieldRule",
    "FieldValidator",
    "STEP_REQUIRED_FIELDS",
    "step_completion",
    "validate_all_steps",
    "validate_field",
    "validate_step",
]
