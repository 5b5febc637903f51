"""Tolerant access to loosely structured property records.

Listings were written by several versions of the listing wizard and
never migrated, so the same logical field can live in a step
sub-object (``steps.res_sale_sale_details.expectedPrice``), a legacy
section (``saleDetails.expectedPrice``), directly on the details
(``expectedPrice``) or on the record row itself (``price``). The helpers
here read all of those shapes without raising.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, Union

from listing_flows.exceptions import RecordParseError
from listing_flows.models.base import PropertyRecord

logger = logging.getLogger(__name__)

Accessor = Union[str, Sequence[str], Callable[[Any], Any]]


def is_empty(value: Any) -> bool:
    """Return True for ``None``, ``""``, and empty lists, tuples and mappings.

    ``0`` and ``False`` are values, not gaps.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, Mapping)):
        return len(value) == 0
    return False


def record_as_mapping(record: Any) -> dict[str, Any]:
    """Return the raw row behind ``record`` as a plain dict."""
    if isinstance(record, PropertyRecord):
        return record.to_dict()
    if isinstance(record, Mapping):
        return dict(record)
    return {}


def parse_property_details(value: Any, strict: bool = False) -> dict[str, Any]:
    """Parse stored ``property_details`` into a mapping.

    Parameters
    ----------
    value : Any
        Mapping, JSON string (or bytes) or ``None``.
    strict : bool
        Raise instead of degrading to an empty mapping.

    Returns
    -------
    dict[str, Any]
        Parsed details; empty when missing or unreadable.

    Raises
    ------
    RecordParseError
        Only when ``strict`` is set and the value is not a JSON object.
    """
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        if not value.strip():
            return {}
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError as exc:
            if strict:
                raise RecordParseError(f"property_details is not valid JSON: {exc}") from exc
            logger.warning("Unparsable property_details, treating as empty: %s", exc)
            return {}
        if isinstance(parsed, Mapping):
            return dict(parsed)
        value = parsed

    if strict:
        raise RecordParseError(
            f"property_details must be a JSON object, got {type(value).__name__}"
        )
    logger.warning(
        "property_details of type %s is not an object, treating as empty",
        type(value).__name__,
    )
    return {}


def get_property_details(record: Any, strict: bool = False) -> dict[str, Any]:
    """Parsed ``property_details`` (or ``propertyDetails``) of a record."""
    row = record_as_mapping(record)
    raw = row.get("property_details")
    if raw is None:
        raw = row.get("propertyDetails")
    return parse_property_details(raw, strict=strict)


def get_steps(details: Mapping[str, Any]) -> dict[str, Any]:
    """The ``steps`` mapping of parsed details, or an empty dict."""
    steps = details.get("steps")
    return dict(steps) if isinstance(steps, Mapping) else {}


def get_path(source: Any, path: str | Sequence[str], default: Any = None) -> Any:
    """Walk nested mappings along a dotted path or key sequence."""
    keys = path.split(".") if isinstance(path, str) else path
    current = source
    for key in keys:
        if not isinstance(current, Mapping) or key not in current:
            return default
        current = current[key]
    return current


def first_non_empty(source: Any, accessors: Iterable[Accessor], default: Any = None) -> Any:
    """Return the first non-empty value produced by ``accessors``.

    Each accessor is a dotted path, a key sequence, or a callable taking
    ``source``. Accessors are tried in order.
    """
    for accessor in accessors:
        value = accessor(source) if callable(accessor) else get_path(source, accessor)
        if not is_empty(value):
            return value
    return default


def field_accessors(
    names: Sequence[str],
    step_ids: Iterable[str | None] = (),
    sections: Iterable[str] = (),
    record_keys: Sequence[str] = (),
) -> list[tuple[str, ...]]:
    """Build the cascade of locations for a logical field.

    The cascade runs from most to least specific: each step sub-object,
    each legacy section, the details themselves, then the record row.
    Every alternate name is tried at one level before moving on.
    Paths are rooted at ``{"details": ..., "record": ...}``.
    """
    paths: list[tuple[str, ...]] = []
    for step_id in step_ids:
        if step_id:
            paths.extend(("details", "steps", step_id, name) for name in names)
    for section in sections:
        paths.extend(("details", section, name) for name in names)
    paths.extend(("details", name) for name in names)
    paths.extend(("record", key) for key in record_keys)
    return paths


def locate_field(
    record: Any,
    names: str | Sequence[str],
    step_ids: Iterable[str | None] = (),
    sections: Iterable[str] = (),
    record_keys: Sequence[str] | None = None,
    default: Any = None,
    details: Mapping[str, Any] | None = None,
) -> Any:
    """Find a field value across every known nesting of a record.

    Parameters
    ----------
    record : Any
        PropertyRecord or raw row mapping.
    names : str | Sequence[str]
        Field name, or alternate names in priority order.
    step_ids : Iterable[str | None]
        Step sub-objects to search first.
    sections : Iterable[str]
        Legacy section objects (``basicDetails``, ``location``, ...).
    record_keys : Sequence[str] | None
        Keys to try on the record row. Defaults to ``names``.
    default : Any
        Returned when every location is empty.
    details : Mapping[str, Any] | None
        Already parsed details, to avoid re-parsing.
    """
    if isinstance(names, str):
        names = (names,)
    root = {
        "details": details if details is not None else get_property_details(record),
        "record": record_as_mapping(record),
    }
    accessors = field_accessors(
        names,
        step_ids=step_ids,
        sections=sections,
        record_keys=names if record_keys is None else record_keys,
    )
    return first_non_empty(root, accessors, default=default)
