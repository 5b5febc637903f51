"""JSON-ready conversion of listings and audit rows for sinks."""

from collections.abc import Mapping
from dataclasses import asdict, is_dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any


def to_dict(obj: Any) -> dict:
    """Convert a listing, a report row or any dataclass to a JSON-ready dict.

    Listings serialize through their own ``to_dict`` so the stored row
    shape (snake_case keys, details as stored) is preserved.
    """
    if isinstance(obj, type):
        return {"value": str(obj)}
    if callable(getattr(obj, "to_dict", None)):
        return serialize_value(obj.to_dict())
    if is_dataclass(obj):
        return dataclass_to_dict(obj)
    if isinstance(obj, Mapping):
        return serialize_value(obj)
    return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Dataclass fields as a dict, values serialized."""
    return serialize_value(asdict(obj))


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output.

    Decimals become floats (listing amounts are whole rupees), enums
    their values, dates and datetimes ISO strings. Tuples become lists.
    """
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {key: serialize_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    return value
