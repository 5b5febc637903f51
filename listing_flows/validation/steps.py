"""Fields checked on each wizard step.

Submission of a step is blocked by exactly these lists, so changes here
change what listing owners can publish.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from listing_flows.flows.steps import FLOW_STEPS
from listing_flows.models.enums import FlowType

DEFAULT_STEP = "default"

LOCATION_FIELDS = ("address", "locality", "city", "state", "pinCode")
RESIDENTIAL_BASIC_FIELDS = (
    "propertyType",
    "bhkType",
    "floor",
    "totalFloors",
    "propertyAge",
    "builtUpArea",
    "bathrooms",
)
COMMERCIAL_BASIC_FIELDS = ("propertyType", "floor", "totalFloors", "builtUpArea", "propertyAge")

STEP_REQUIRED_FIELDS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    # Residential rent
    "res_rent_basic_details": RESIDENTIAL_BASIC_FIELDS,
    "res_rent_location": LOCATION_FIELDS,
    "res_rent_features": ("bathrooms", "amenities", "furnishing"),
    # Residential sale
    "res_sale_basic_details": RESIDENTIAL_BASIC_FIELDS,
    "res_sale_location": LOCATION_FIELDS,
    "res_sale_sale_details": ("expectedPrice", "possessionDate", "furnishing"),
    "res_sale_features": ("bathrooms", "amenities"),
    # PG / hostel
    "res_pg_basic_details": ("roomType", "roomCapacity", "rentAmount"),
    "res_pg_location": LOCATION_FIELDS,
    "res_pg_pg_details": ("genderPreference", "mealOption", "availableFrom"),
    "res_pg_features": ("bathrooms", "amenities"),
    # Flatmates
    "res_flat_basic_details": ("propertyType", "bhkType", "floor", "totalFloors", "builtUpArea"),
    "res_flat_location": LOCATION_FIELDS,
    "res_flat_features": ("bathrooms", "amenities"),
    # Commercial rent
    "com_rent_basic_details": COMMERCIAL_BASIC_FIELDS,
    "com_rent_location": LOCATION_FIELDS,
    "com_rent_rental": ("rentAmount", "securityDeposit", "availableFrom", "leaseDuration"),
    "com_rent_features": ("bathrooms", "amenities"),
    # Commercial sale
    "com_sale_basic_details": COMMERCIAL_BASIC_FIELDS,
    "com_sale_location": LOCATION_FIELDS,
    "com_sale_sale_details": ("expectedPrice", "possessionDate"),
    "com_sale_features": ("bathrooms", "amenities"),
    # Coworking
    "com_cow_basic_details": ("spaceType", "capacity", "builtUpArea"),
    "com_cow_location": LOCATION_FIELDS,
    "com_cow_features": ("amenities",),
    # Land sale
    "land_sale_basic_details": ("landType", "plotArea", "expectedPrice"),
    "land_sale_location": LOCATION_FIELDS,
    "land_sale_land_features": ("approvalStatus", "roadAccess"),
    # Unrecognised step-ids
    DEFAULT_STEP: ("propertyType", "address", "city", "state"),
})


def validated_steps_for_flow(flow: FlowType) -> tuple[str, ...]:
    """Step-ids of ``flow`` that have a field list, in wizard order."""
    return tuple(step for step in FLOW_STEPS[flow] if step in STEP_REQUIRED_FIELDS)
