"""Wizard step registry.

Every flow's wizard writes its answers under ``steps.<step_id>``, where
the step-id is the flow prefix plus the step name
(``res_rent_basic_details``). This module owns that naming contract.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from listing_flows.flows.detection import STEP_PREFIX_FLOWS, detect_flow_type
from listing_flows.lookup import get_property_details, get_steps, is_empty, record_as_mapping
from listing_flows.models.base import ListingCompleteness, StepIds
from listing_flows.models.enums import FlowType

FLOW_PREFIXES: dict[FlowType, str] = {flow: prefix for prefix, flow in STEP_PREFIX_FLOWS}

# Ordered wizard steps per flow
FLOW_STEPS: dict[FlowType, tuple[str, ...]] = {
    FlowType.RESIDENTIAL_RENT: (
        "res_rent_basic_details",
        "res_rent_location",
        "res_rent_rental",
        "res_rent_features",
    ),
    FlowType.RESIDENTIAL_SALE: (
        "res_sale_basic_details",
        "res_sale_location",
        "res_sale_sale_details",
        "res_sale_features",
    ),
    FlowType.RESIDENTIAL_PGHOSTEL: (
        "res_pg_basic_details",
        "res_pg_location",
        "res_pg_pg_details",
        "res_pg_features",
    ),
    FlowType.RESIDENTIAL_FLATMATES: (
        "res_flat_basic_details",
        "res_flat_location",
        "res_flat_flatmate_details",
        "res_flat_features",
    ),
    FlowType.COMMERCIAL_RENT: (
        "com_rent_basic_details",
        "com_rent_location",
        "com_rent_rental",
        "com_rent_features",
    ),
    FlowType.COMMERCIAL_SALE: (
        "com_sale_basic_details",
        "com_sale_location",
        "com_sale_sale_details",
        "com_sale_features",
    ),
    FlowType.COMMERCIAL_COWORKING: (
        "com_cow_basic_details",
        "com_cow_location",
        "com_cow_coworking_details",
        "com_cow_features",
    ),
    FlowType.LAND_SALE: (
        "land_sale_basic_details",
        "land_sale_location",
        "land_sale_land_features",
    ),
}

# Step-name suffix -> StepIds attribute
_SECTION_SUFFIXES: tuple[tuple[str, str], ...] = (
    ("basic_details", "basic_details"),
    ("location", "location"),
    ("rental", "rental"),
    ("sale_details", "sale_details"),
    ("pg_details", "pg_details"),
    ("flatmate_details", "flatmate_details"),
    ("coworking_details", "coworking_details"),
    ("land_features", "land_features"),
    ("features", "features"),
)


def flow_for_step_id(step_id: str) -> FlowType | None:
    """The flow a step-id belongs to, from its prefix."""
    if not isinstance(step_id, str):
        return None
    for prefix, flow in STEP_PREFIX_FLOWS:
        if step_id.startswith(prefix):
            return flow
    return None


def step_ids_for_flow(flow: FlowType | str) -> StepIds:
    """Map logical sections to the step-ids of ``flow``.

    Land listings keep their price in the basic details step, so for
    ``land_sale`` ``sale_details`` points there.
    """
    flow = FlowType.from_hint(flow) or FlowType.RESIDENTIAL_RENT
    prefix = FLOW_PREFIXES[flow]
    sections: dict[str, str] = {}
    for step_id in FLOW_STEPS[flow]:
        name = step_id[len(prefix):]
        for suffix, attr in _SECTION_SUFFIXES:
            if name == suffix:
                sections[attr] = step_id
                break
    if flow is FlowType.LAND_SALE:
        sections["sale_details"] = sections["basic_details"]
    return StepIds(**sections)


def format_step_id(step_id: str) -> str:
    """Display name of a step-id.

    >>> format_step_id("com_sale_basic_details")
    'Basic Details'
    """
    parts = step_id.split("_")[2:]
    return " ".join(part[:1].upper() + part[1:] for part in parts if part)


def format_field_key(key: str) -> str:
    """camelCase field key to a display label.

    >>> format_field_key("builtUpArea")
    'Built Up Area'
    """
    spaced = re.sub(r"([A-Z])", r" \1", key).replace("_", " ").strip()
    return spaced[:1].upper() + spaced[1:]


def check_listing_completeness(record: Any) -> ListingCompleteness:
    """Report which wizard steps of a listing are still empty."""
    row = record_as_mapping(record)
    details = get_property_details(row)
    flow = detect_flow_type(row)
    has_images = not is_empty(row.get("images")) or not is_empty(details.get("images"))

    if not details:
        return ListingCompleteness(flow_type=flow, missing_steps=["all details"], has_images=has_images)

    steps = get_steps(details)
    missing = [
        step_id
        for step_id in FLOW_STEPS[flow]
        if not isinstance(steps.get(step_id), Mapping) or not steps[step_id]
    ]
    return ListingCompleteness(flow_type=flow, missing_steps=missing, has_images=has_images)
