"""Enumeration types for listing entities."""

from __future__ import annotations

from enum import Enum
from typing import Any

from listing_flows.exceptions import UnknownFlowError


class FlowType(str, Enum):
    RESIDENTIAL_RENT = "residential_rent"
    RESIDENTIAL_SALE = "residential_sale"
    RESIDENTIAL_PGHOSTEL = "residential_pghostel"
    RESIDENTIAL_FLATMATES = "residential_flatmates"
    COMMERCIAL_RENT = "commercial_rent"
    COMMERCIAL_SALE = "commercial_sale"
    COMMERCIAL_COWORKING = "commercial_coworking"
    LAND_SALE = "land_sale"

    @classmethod
    def from_hint(cls, value: Any) -> FlowType | None:
        """Return the flow named by ``value``, or ``None`` if it names none."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @classmethod
    def parse(cls, value: Any) -> FlowType:
        """Strict variant of :meth:`from_hint`.

        Raises
        ------
        UnknownFlowError
            If ``value`` is not a known flow type.
        """
        flow = cls.from_hint(value)
        if flow is None:
            raise UnknownFlowError(f"Unknown flow type: {value!r}")
        return flow


class FlowCategory(str, Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    LAND = "land"


class ListingType(str, Enum):
    RENT = "rent"
    SALE = "sale"


class FieldKind(str, Enum):
    """Display formatting family of a field, derived from its key."""

    CURRENCY = "currency"
    PHONE = "phone"
    DATE = "date"
    BOOLEAN = "boolean"
    TEXT = "text"
