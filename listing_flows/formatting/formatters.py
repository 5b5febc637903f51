"""Display formatters for listing field values.

Every formatter is total: bad input renders as a placeholder, never as
an exception.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

from dateutil import parser as date_parser

from listing_flows.config import FormatConfig
from listing_flows.formatting.kinds import BOOLEAN_STRINGS

DEFAULT_FORMAT = FormatConfig()

_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_NON_DIGITS = re.compile(r"\D")
# Parts a date string leaves out; fixed so parsing never depends on today
MISSING_DATE_PARTS = datetime(2001, 1, 1)


def to_number(value: Any) -> Decimal | None:
    """Read a number from form input.

    Accepts ints, floats, Decimals and strings with a leading number
    (thousands separators are ignored). Bools are not numbers here.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, (int, float)):
        try:
            number = Decimal(str(value))
        except InvalidOperation:
            return None
        return number if number.is_finite() else None
    if isinstance(value, str):
        match = _NUMBER_PREFIX.match(value.replace(",", ""))
        if match is None:
            return None
        return Decimal(match.group(0).strip())
    return None


def group_indian(number: int) -> str:
    """Group digits the Indian way: ``1500000`` -> ``15,00,000``."""
    sign = "-" if number < 0 else ""
    digits = str(abs(number))
    if len(digits) <= 3:
        return sign + digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return sign + ",".join(groups + [tail])


# Longer figures are not amounts anyone typed; they render as non-numeric
MAX_WHOLE_DIGITS = 1000


def _round_whole(number: Decimal) -> int | None:
    """Round half-up to a whole number, with enough precision for any size."""
    if number.adjusted() >= MAX_WHOLE_DIGITS:
        return None
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, number.adjusted() + 2)
        return int(number.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_currency(value: Any, config: FormatConfig = DEFAULT_FORMAT) -> str:
    """Format an amount as whole rupees, e.g. ``₹15,00,000``.

    Non-numeric or empty input renders as the zero amount.
    """
    number = to_number(value)
    whole = _round_whole(number) if number is not None else None
    if whole is None:
        whole = 0
    if whole < 0:
        return f"-{config.currency_symbol}{group_indian(-whole)}"
    return f"{config.currency_symbol}{group_indian(whole)}"


def format_phone(value: Any, config: FormatConfig = DEFAULT_FORMAT) -> str:
    """Format a national mobile number as ``+91 98765 43210``.

    Numbers already carrying the country code are reformatted the same
    way; anything else is returned unchanged.
    """
    if value is None or value == "":
        return config.placeholder
    original = str(value)
    digits = _NON_DIGITS.sub("", original)
    code = config.country_code
    if len(digits) == 10 + len(code) and digits.startswith(code):
        digits = digits[len(code):]
    if len(digits) == 10:
        return f"+{code} {digits[:5]} {digits[5:]}"
    return original


def parse_date(value: Any) -> date | None:
    """Parse a date from form input, or return ``None`` if it is not one.

    Numbers are epoch milliseconds, as browsers store them.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        try:
            return datetime.fromtimestamp(float(value) / 1000, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str) and value.strip():
        try:
            return date_parser.parse(value.strip(), default=MISSING_DATE_PARTS).date()
        except (ValueError, OverflowError):
            return None
    return None


def format_date(value: Any, config: FormatConfig = DEFAULT_FORMAT) -> str:
    """Format a date as DD/MM/YYYY.

    Missing values render as "Not specified", unparsable ones as
    "Invalid date".
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return config.not_specified
    parsed = parse_date(value)
    if parsed is None:
        return config.invalid_date
    return parsed.strftime(config.date_format)


def to_bool(value: Any) -> bool | None:
    """Loose boolean reading of a form value; ``None`` if it has none."""
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "on":
            return True
        return BOOLEAN_STRINGS.get(lowered, False)
    if isinstance(value, (int, float)):
        return value != 0
    return None


def format_boolean(value: Any, config: FormatConfig = DEFAULT_FORMAT) -> str:
    flag = to_bool(value)
    if flag is None:
        return config.placeholder
    return "Yes" if flag else "No"


def format_area(value: Any, unit: str | None = None, config: FormatConfig = DEFAULT_FORMAT) -> str:
    """Format an area as a grouped whole number with its unit.

    >>> format_area(1250)
    '1,250 sqft'
    """
    number = to_number(value)
    whole = _round_whole(number) if number is not None else None
    if not whole:
        return config.placeholder
    return f"{group_indian(whole)} {unit or config.default_area_unit}"


def format_capacity(value: Any, config: FormatConfig = DEFAULT_FORMAT) -> str:
    """Format a head count: "1 Person", "4 Persons"."""
    if value is None or value == "" or value == 0:
        return config.placeholder
    number = to_number(value)
    if number is not None and number >= 1:
        count = _round_whole(number)
        if count is not None:
            return f"{count} Person" if count == 1 else f"{count} Persons"
    return format_text(value, config)


def format_distance(value: Any, config: FormatConfig = DEFAULT_FORMAT) -> str:
    if value is None or value == "" or value == 0:
        return config.placeholder
    return f"{format_text(value, config)} km"


def format_dimensions(length: Any, width: Any, config: FormatConfig = DEFAULT_FORMAT) -> str:
    if not length or not width:
        return config.placeholder
    return f"{format_text(length, config)} x {format_text(width, config)}"


def format_text(value: Any, config: FormatConfig = DEFAULT_FORMAT) -> str:
    """Plain rendering; empty, zero and empty containers become the placeholder."""
    if value is None or value == "":
        return config.placeholder
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (int, float, Decimal)):
        if value == 0:
            return config.placeholder
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, Decimal):
            return format(value.normalize(), "f")
        return str(value)
    if isinstance(value, (list, tuple)):
        items = [format_text(item, config) for item in value]
        items = [item for item in items if item != config.placeholder]
        return ", ".join(items) if items else config.placeholder
    if isinstance(value, Mapping):
        parts = [
            f"{key}: {format_text(item, config)}"
            for key, item in value.items()
            if format_text(item, config) != config.placeholder
        ]
        return ", ".join(parts) if parts else config.placeholder
    return str(value)
