"""Context-aware rendering of listing field values."""

from __future__ import annotations

from typing import Any

from listing_flows.config import FormatConfig
from listing_flows.formatting.formatters import (
    format_area,
    format_boolean,
    format_capacity,
    format_currency,
    format_date,
    format_phone,
    format_text,
)
from listing_flows.formatting.kinds import classify_field_kind, has_boolean_keyword, looks_boolean
from listing_flows.models.enums import FieldKind


class FieldFormatter:
    """Render field values for display, choosing the format from the key.

    Parameters
    ----------
    config : FormatConfig | None
        Currency symbol, country code, placeholder and date format.
    """

    def __init__(self, config: FormatConfig | None = None) -> None:
        self.config = config or FormatConfig()

    def render(self, value: Any, field_key: str) -> str:
        """Render ``value`` as the display string for ``field_key``.

        Never raises. Missing or unparsable values come back as a
        placeholder ("-", "Not specified", "Invalid date" or the zero
        amount, depending on the field).
        """
        kind = classify_field_kind(field_key)

        if kind is FieldKind.CURRENCY:
            return format_currency(value, self.config)
        if kind is FieldKind.PHONE:
            return format_phone(value, self.config)
        if kind is FieldKind.DATE:
            # "parkingAvailable: true" is a flag, not a date
            if looks_boolean(value) and has_boolean_keyword(field_key):
                return format_boolean(value, self.config)
            return format_date(value, self.config)
        if kind is FieldKind.BOOLEAN and looks_boolean(value):
            return format_boolean(value, self.config)
        return format_text(value, self.config)

    def area(self, value: Any, unit: str | None = None) -> str:
        return format_area(value, unit, self.config)

    def capacity(self, value: Any) -> str:
        return format_capacity(value, self.config)

    def currency(self, value: Any) -> str:
        return format_currency(value, self.config)


_default_formatter = FieldFormatter()


def render_field_value(value: Any, field_key: str) -> str:
    """Render a field with the default (Indian marketplace) formatting."""
    return _default_formatter.render(value, field_key)
