"""Flow type detection for stored property records.

No single column says which listing wizard produced a record, so the
flow is inferred from a cascade of increasingly weak signals:

1. an explicit hint (``flow.flowType``, ``flowType``, then the row's
   ``flowType``/``flow_type``),
2. the prefix of the first step-id under ``steps``,
3. characteristic sections or step names (PG, flatmates, coworking, land),
4. ``residential_rent``.

Detection never raises; anything unreadable simply falls through to the
next signal.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from listing_flows.lookup import get_property_details, get_steps, record_as_mapping
from listing_flows.models.enums import FlowCategory, FlowType, ListingType

logger = logging.getLogger(__name__)

DEFAULT_FLOW = FlowType.RESIDENTIAL_RENT

# First matching prefix wins
STEP_PREFIX_FLOWS: tuple[tuple[str, FlowType], ...] = (
    ("res_pg_", FlowType.RESIDENTIAL_PGHOSTEL),
    ("res_flat_", FlowType.RESIDENTIAL_FLATMATES),
    ("res_rent_", FlowType.RESIDENTIAL_RENT),
    ("res_sale_", FlowType.RESIDENTIAL_SALE),
    ("com_rent_", FlowType.COMMERCIAL_RENT),
    ("com_sale_", FlowType.COMMERCIAL_SALE),
    ("com_cow_", FlowType.COMMERCIAL_COWORKING),
    ("land_sale_", FlowType.LAND_SALE),
)

FLOW_DISPLAY_NAMES: dict[FlowType, str] = {
    FlowType.RESIDENTIAL_RENT: "Residential Rent",
    FlowType.RESIDENTIAL_SALE: "Residential Sale",
    FlowType.RESIDENTIAL_FLATMATES: "Flatmates",
    FlowType.RESIDENTIAL_PGHOSTEL: "PG/Hostel",
    FlowType.COMMERCIAL_RENT: "Commercial Rent",
    FlowType.COMMERCIAL_SALE: "Commercial Sale",
    FlowType.COMMERCIAL_COWORKING: "Coworking Space",
    FlowType.LAND_SALE: "Land/Plot Sale",
}


def _truthy(value: Any) -> bool:
    """Truthiness as the listing UI evaluates it: empty containers count."""
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0
    if isinstance(value, str):
        return value != ""
    return True


class FlowClassifier:
    """Classify property records into one of the eight listing flows."""

    def detect(self, record: Any) -> FlowType:
        """Detect the flow of ``record``.

        Parameters
        ----------
        record : Any
            PropertyRecord, raw row mapping or ``None``.

        Returns
        -------
        FlowType
            Detected flow; ``residential_rent`` when nothing matches.
        """
        flow, signal = self.detect_with_signal(record)
        logger.debug(
            "Detected flow type %s from %s",
            flow.value,
            signal,
            extra={"flow_type": flow.value, "signal": signal},
        )
        return flow

    def detect_with_signal(self, record: Any) -> tuple[FlowType, str]:
        """Detect the flow and name the signal that decided it."""
        row = record_as_mapping(record)
        details = get_property_details(row)
        steps = get_steps(details)

        flow = self.from_hint(details, row)
        if flow is not None:
            return flow, "hint"

        flow = self.from_steps(steps)
        if flow is not None:
            return flow, "step_prefix"

        flow = self.from_characteristics(details, steps)
        if flow is not None:
            return flow, "characteristics"

        return DEFAULT_FLOW, "default"

    def from_hint(self, details: Mapping[str, Any], row: Mapping[str, Any]) -> FlowType | None:
        flow_section = details.get("flow")
        candidates = (
            flow_section.get("flowType") if isinstance(flow_section, Mapping) else None,
            details.get("flowType"),
            row.get("flowType"),
            row.get("flow_type"),
        )
        for candidate in candidates:
            if not _truthy(candidate):
                continue
            flow = FlowType.from_hint(candidate)
            if flow is not None:
                return flow
            logger.debug("Ignoring unknown flow hint %r", candidate)
        return None

    def from_steps(self, steps: Mapping[str, Any]) -> FlowType | None:
        if not steps:
            return None
        first_step = next(iter(steps))
        for prefix, flow in STEP_PREFIX_FLOWS:
            if first_step.startswith(prefix):
                return flow
        return None

    def from_characteristics(
        self, details: Mapping[str, Any], steps: Mapping[str, Any]
    ) -> FlowType | None:
        step_keys = list(steps)

        if _truthy(details.get("pgDetails")) or any("pg_details" in k for k in step_keys):
            return FlowType.RESIDENTIAL_PGHOSTEL

        if _truthy(details.get("flatmateDetails")) or any("flatmate" in k for k in step_keys):
            return FlowType.RESIDENTIAL_FLATMATES

        if _truthy(details.get("coworkingDetails")) or any("coworking" in k for k in step_keys):
            return FlowType.COMMERCIAL_COWORKING

        basic = details.get("basicDetails")
        land_type = basic.get("propertyType") if isinstance(basic, Mapping) else None
        if (
            _truthy(details.get("landDetails"))
            or land_type == "Land"
            or any("land" in k for k in step_keys)
        ):
            return FlowType.LAND_SALE

        return None


_default_classifier = FlowClassifier()


def detect_flow_type(record: Any) -> FlowType:
    """Detect the flow of ``record`` with the shared classifier."""
    return _default_classifier.detect(record)


def get_flow_display_name(flow: FlowType | str) -> str:
    """Human readable flow name.

    >>> get_flow_display_name("commercial_coworking")
    'Coworking Space'
    """
    known = FlowType.from_hint(flow)
    if known is not None:
        return FLOW_DISPLAY_NAMES[known]
    return str(flow).replace("_", " ").title()


def get_flow_category(flow: FlowType | str) -> FlowCategory:
    """Residential, commercial or land, from the flow's first token."""
    token = str(getattr(flow, "value", flow)).split("_")[0]
    try:
        return FlowCategory(token)
    except ValueError:
        return FlowCategory.RESIDENTIAL


def get_listing_type(flow: FlowType | str) -> ListingType:
    return ListingType.SALE if is_sale_property(flow) else ListingType.RENT


def is_sale_property(flow: FlowType | str) -> bool:
    return "sale" in str(getattr(flow, "value", flow))
