"""Step and field validation for listing form data."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from listing_flows.flows.steps import flow_for_step_id
from listing_flows.formatting.formatters import to_number
from listing_flows.lookup import is_empty
from listing_flows.models.base import FlowValidationResult, ValidationResult
from listing_flows.models.enums import FlowType
from listing_flows.validation.rules import FIELD_RULES, FieldRule, context_flow
from listing_flows.validation.steps import (
    DEFAULT_STEP,
    STEP_REQUIRED_FIELDS,
    validated_steps_for_flow,
)

logger = logging.getLogger(__name__)


class FieldValidator:
    """Validate form data against the static rule tables.

    Parameters
    ----------
    rules : Mapping[str, FieldRule] | None
        Field rules by field name. Defaults to :data:`FIELD_RULES`.
    step_fields : Mapping[str, tuple[str, ...]] | None
        Checked fields by step-id. Defaults to :data:`STEP_REQUIRED_FIELDS`.
    """

    def __init__(
        self,
        rules: Mapping[str, FieldRule] | None = None,
        step_fields: Mapping[str, tuple[str, ...]] | None = None,
    ) -> None:
        self.rules = FIELD_RULES if rules is None else rules
        self.step_fields = STEP_REQUIRED_FIELDS if step_fields is None else step_fields

    def validate_field(
        self,
        field_name: str,
        value: Any,
        context: Mapping[str, Any] | None = None,
    ) -> str | None:
        """Check one value against its field rule.

        Parameters
        ----------
        field_name : str
            Field name; unknown names always pass.
        value : Any
            Submitted value (string or native type).
        context : Mapping[str, Any] | None
            Whole form data, plus ``flowType`` and ``currentStep``.

        Returns
        -------
        str | None
            Error message, or ``None`` if the value is acceptable.
        """
        rule = self.rules.get(field_name)
        if rule is None:
            return None
        context = context or {}

        if is_empty(value):
            if rule.required:
                return f"{rule.label} is required"
            if rule.custom is not None and rule.check_empty:
                return rule.custom(value, context)
            return None

        if isinstance(value, str):
            if rule.min_length is not None and len(value) < rule.min_length:
                return f"{rule.label} must be at least {rule.min_length} characters"
            if rule.max_length is not None and len(value) > rule.max_length:
                return f"{rule.label} must not exceed {rule.max_length} characters"

        number = _as_number(value)
        if number is not None:
            if rule.min is not None and number < rule.min:
                return f"{rule.label} must be at least {_plain(rule.min)}"
            if rule.max is not None and number > rule.max:
                return f"{rule.label} must not exceed {_plain(rule.max)}"

        if rule.pattern is not None and isinstance(value, str) and not rule.pattern.match(value):
            return rule.pattern_message or f"{rule.label} format is invalid"

        if rule.custom is not None:
            return rule.custom(value, context)

        return None

    def fields_for_step(self, step_id: str) -> tuple[str, ...]:
        """Checked fields for ``step_id``; the default set for unknown steps."""
        fields = self.step_fields.get(step_id) if isinstance(step_id, str) else None
        if fields is None:
            logger.warning(
                "No field list for step %r, using the default rule set", step_id, extra={"step_id": step_id}
            )
            return self.step_fields[DEFAULT_STEP]
        return fields

    def validate_step(self, step_id: str, form_data: Mapping[str, Any] | None) -> ValidationResult:
        """Validate every checked field of one step.

        Values are read from ``form_data["steps"][step_id]`` first and
        from the top level of ``form_data`` otherwise. Never raises.
        """
        form_data = form_data if isinstance(form_data, Mapping) else {}
        context = self.step_context(step_id, form_data)

        errors: dict[str, str] = {}
        for field_name in self.fields_for_step(step_id):
            error = self.validate_field(field_name, step_value(form_data, step_id, field_name), context)
            if error:
                errors[field_name] = error

        return ValidationResult.from_errors(errors, step_id=step_id)

    def validate_all_steps(
        self, flow: FlowType | str, form_data: Mapping[str, Any] | None
    ) -> FlowValidationResult:
        """Validate each step of ``flow`` that has a field list."""
        flow_type = FlowType.from_hint(flow) or FlowType.RESIDENTIAL_RENT
        form_data = form_data if isinstance(form_data, Mapping) else {}
        if context_flow(form_data) is None:
            form_data = {**form_data, "flowType": flow_type.value}
        results = {
            step_id: self.validate_step(step_id, form_data)
            for step_id in validated_steps_for_flow(flow_type)
        }
        return FlowValidationResult(flow_type=flow_type, steps=results)

    def step_completion(self, step_id: str, form_data: Mapping[str, Any] | None) -> int:
        """Percentage of a step's required fields that have a value."""
        form_data = form_data if isinstance(form_data, Mapping) else {}
        required = [
            name
            for name in self.fields_for_step(step_id)
            if name in self.rules and self.rules[name].required
        ]
        if not required:
            return 100
        filled = sum(1 for name in required if not is_empty(step_value(form_data, step_id, name)))
        return round(filled * 100 / len(required))

    @staticmethod
    def step_context(step_id: str, form_data: Mapping[str, Any]) -> dict[str, Any]:
        """Form data plus the current step and, if absent, the step's flow."""
        context = dict(form_data)
        context["currentStep"] = step_id
        if context_flow(context) is None:
            flow = flow_for_step_id(step_id)
            if flow is not None:
                context["flowType"] = flow.value
        return context


def step_value(form_data: Mapping[str, Any], step_id: str, field_name: str) -> Any:
    """Value of a field as submitted on a step."""
    steps = form_data.get("steps")
    if isinstance(steps, Mapping) and isinstance(step_id, str):
        step_data = steps.get(step_id)
        if isinstance(step_data, Mapping) and field_name in step_data:
            return step_data[field_name]
    return form_data.get(field_name)


def _as_number(value: Any) -> Any:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if value == value else None
    if isinstance(value, str):
        stripped = value.strip()
        try:
            return float(stripped) if stripped else None
        except ValueError:
            return None
    return to_number(value)


def _plain(number: float) -> str:
    return str(int(number)) if float(number).is_integer() else str(number)


_default_validator = FieldValidator()


def validate_field(
    field_name: str, value: Any, context: Mapping[str, Any] | None = None
) -> str | None:
    """Validate one field with the shared validator."""
    return _default_validator.validate_field(field_name, value, context)


def validate_step(step_id: str, form_data: Mapping[str, Any] | None) -> ValidationResult:
    """Validate one step with the shared validator."""
    return _default_validator.validate_step(step_id, form_data)


def validate_all_steps(flow: FlowType | str, form_data: Mapping[str, Any] | None) -> FlowValidationResult:
    return _default_validator.validate_all_steps(flow, form_data)


def step_completion(step_id: str, form_data: Mapping[str, Any] | None) -> int:
    return _default_validator.step_completion(step_id, form_data)
