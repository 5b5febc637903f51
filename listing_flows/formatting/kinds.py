"""Field-key classification for display formatting.

Field names in stored listings were never normalised, so the display
format is chosen by keyword: anything mentioning "price" is money,
anything mentioning "phone" is a phone number, and so on. All of that
fuzzy matching lives here; formatters switch on the resulting
:class:`FieldKind`.
"""

from __future__ import annotations

from typing import Any

from listing_flows.models.enums import FieldKind

# Checked in this order, first match wins
KIND_KEYWORDS: tuple[tuple[FieldKind, tuple[str, ...]], ...] = (
    (FieldKind.CURRENCY, ("price", "rent", "deposit", "cost", "amount", "charge")),
    (FieldKind.PHONE, ("phone", "mobile", "contact")),
    (FieldKind.DATE, ("date", "from", "available", "possession")),
    (FieldKind.BOOLEAN, ("available", "negotiable", "parking", "furnished", "lift", "security")),
)

BOOLEAN_STRINGS = {"true": True, "yes": True, "false": False, "no": False}


def classify_field_kind(field_key: str) -> FieldKind:
    """Return the display kind of a field from its key.

    >>> classify_field_kind("expectedPrice")
    <FieldKind.CURRENCY: 'currency'>
    >>> classify_field_kind("possessionDate")
    <FieldKind.DATE: 'date'>
    """
    key = (field_key or "").lower()
    for kind, keywords in KIND_KEYWORDS:
        if any(word in key for word in keywords):
            return kind
    return FieldKind.TEXT


def has_boolean_keyword(field_key: str) -> bool:
    """True if the key names a yes/no attribute."""
    key = (field_key or "").lower()
    boolean_words = dict(KIND_KEYWORDS)[FieldKind.BOOLEAN]
    return any(word in key for word in boolean_words)


def looks_boolean(value: Any) -> bool:
    """True for bools and the strings true/false/yes/no (any case)."""
    if isinstance(value, bool):
        return True
    return isinstance(value, str) and value.strip().lower() in BOOLEAN_STRINGS
