"""Display formatting for listing fields."""

from listing_flows.formatting.formatters import (
    format_area,
    format_boolean,
    format_capacity,
    format_currency,
    format_date,
    format_dimensions,
    format_distance,
    format_phone,
    format_text,
    group_indian,
    parse_date,
    to_bool,
    to_number,
)
from listing_flows.formatting.kinds import classify_field_kind
from listing_flows.formatting.render import FieldFormatter, render_field_value

__all__ = [
    "FieldFormatter",
    "classify_field_kind",
    "format_area",
    "format_boolean",
    "format_capacity",
    "format_currency",
    "format_date",
    "format_dimensions",
    "format_distance",
    "format_phone",
    "format_text",
    "group_indian",
    "parse_date",
    "render_field_value",
    "to_bool",
    "to_number",
]
