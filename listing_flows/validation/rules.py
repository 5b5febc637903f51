"""Field validation rules for the listing wizard.

The table below is closed: one :class:`FieldRule` per known field name.
Fields without a rule are always valid.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from listing_flows.formatting.formatters import parse_date, to_number
from listing_flows.lookup import is_empty
from listing_flows.models.enums import FlowType

CustomCheck = Callable[[Any, Mapping[str, Any]], "str | None"]

_LEADING_INT = re.compile(r"^\s*[+-]?\d+")


@dataclass(frozen=True)
class FieldRule:
    """Validation rule for one field.

    ``custom`` receives the value and the whole form context and has the
    final say. It normally only sees non-empty values; set
    ``check_empty`` for rules whose requiredness depends on context.
    """

    label: str
    required: bool = False
    min_length: int | None = None
    max_length: int | None = None
    min: float | None = None
    max: float | None = None
    pattern: re.Pattern[str] | None = None
    pattern_message: str | None = None
    custom: CustomCheck | None = None
    check_empty: bool = False


def parse_int(value: Any) -> int | None:
    """Integer reading of form input, tolerant of strings like ``"3"`` or ``"12 ft"``."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(0)) if match else None
    number = to_number(value)
    return int(number) if number is not None else None


def context_flow(context: Mapping[str, Any]) -> FlowType | None:
    """Flow type named by a form context (``flowType`` or ``flow.flowType``)."""
    flow = FlowType.from_hint(context.get("flowType"))
    if flow is None and isinstance(context.get("flow"), Mapping):
        flow = FlowType.from_hint(context["flow"].get("flowType"))
    return flow


def context_step(context: Mapping[str, Any]) -> str | None:
    step = context.get("currentStep") or context.get("current_step")
    return step if isinstance(step, str) else None


def context_value(context: Mapping[str, Any], field_name: str) -> Any:
    """Value of a sibling field: current step sub-object first, then top level."""
    step = context_step(context)
    steps = context.get("steps")
    if step and isinstance(steps, Mapping) and isinstance(steps.get(step), Mapping):
        if field_name in steps[step]:
            return steps[step][field_name]
    return context.get(field_name)


def _int_range(label: str, low: int, high: int) -> CustomCheck:
    def check(value: Any, context: Mapping[str, Any]) -> str | None:
        number = parse_int(value)
        if number is None:
            return f"{label} must be a number"
        if number < low:
            return f"{label} must be at least {low}"
        if number > high:
            return f"{label} must not exceed {high}"
        return None

    return check


_check_floor = _int_range("Floor", 0, 99)
_check_built_up_area = _int_range("Built-up Area", 50, 1_000_000)
_check_room_capacity = _int_range("Room Capacity", 1, 20)
_check_capacity = _int_range("Capacity", 1, 10_000)


def _check_total_floors(value: Any, context: Mapping[str, Any]) -> str | None:
    error = _int_range("Total Floors", 1, 99)(value, context)
    if error:
        return error
    floor = parse_int(context_value(context, "floor"))
    if floor is not None and parse_int(value) < floor:
        return "Total Floors cannot be less than Floor"
    return None


def _date_check(label: str) -> CustomCheck:
    def check(value: Any, context: Mapping[str, Any]) -> str | None:
        if parse_date(value) is None:
            return f"{label} must be a valid date"
        return None

    return check


def _check_coordinates(value: Any, context: Mapping[str, Any]) -> str | None:
    if not isinstance(value, Mapping):
        return "Coordinates are required"
    lat = to_number(value.get("latitude", value.get("lat")))
    lng = to_number(value.get("longitude", value.get("lng")))
    if lat is None or lng is None:
        return "Please select location on map"
    if abs(lat) > 90 or abs(lng) > 180:
        return "Invalid coordinates"
    return None


def _at_least_one(message: str) -> CustomCheck:
    def check(value: Any, context: Mapping[str, Any]) -> str | None:
        if isinstance(value, (list, tuple)) and not any(not is_empty(item) for item in value):
            return message
        return None

    return check


# Steps on which the bathroom count must be filled in. Sale listings
# collect it in the features step, never in basic details.
BATHROOMS_REQUIRED_STEPS: Mapping[FlowType, tuple[str, ...]] = MappingProxyType({
    FlowType.RESIDENTIAL_RENT: ("res_rent_features",),
    FlowType.COMMERCIAL_RENT: ("com_rent_features",),
    FlowType.COMMERCIAL_SALE: ("com_sale_features",),
    FlowType.RESIDENTIAL_PGHOSTEL: ("res_pg_features",),
    FlowType.RESIDENTIAL_FLATMATES: ("res_flat_features",),
})


def bathrooms_required(context: Mapping[str, Any]) -> bool:
    """Whether the bathroom count is mandatory for the context's flow and step."""
    flow = context_flow(context)
    step = context_step(context)
    if flow is FlowType.RESIDENTIAL_SALE and step == "res_sale_basic_details":
        return False
    if flow is None or step is None:
        return False
    return step in BATHROOMS_REQUIRED_STEPS.get(flow, ())


def _check_bathrooms(value: Any, context: Mapping[str, Any]) -> str | None:
    if is_empty(value):
        return "Bathrooms is required" if bathrooms_required(context) else None
    return _int_range("Bathrooms", 1, 10)(value, context)


FIELD_RULES: Mapping[str, FieldRule] = MappingProxyType({
    # Basic details
    "title": FieldRule("Property Title", required=True, min_length=5, max_length=100),
    "propertyType": FieldRule("Property Type", required=True),
    "bhkType": FieldRule("BHK Type", required=True),
    "floor": FieldRule("Floor", required=True, custom=_check_floor),
    "totalFloors": FieldRule("Total Floors", required=True, custom=_check_total_floors),
    "builtUpArea": FieldRule("Built-up Area", required=True, custom=_check_built_up_area),
    "builtUpAreaUnit": FieldRule("Area Unit"),
    "carpetArea": FieldRule("Carpet Area", min=1),
    "bathrooms": FieldRule("Bathrooms", custom=_check_bathrooms, check_empty=True),
    "balconies": FieldRule("Balconies", min=0, max=10),
    "facing": FieldRule("Facing"),
    "propertyAge": FieldRule("Property Age", required=True),
    "propertyCondition": FieldRule("Property Condition"),
    "description": FieldRule("Description", max_length=2000),
    # Location
    "address": FieldRule("Address", required=True, min_length=10, max_length=500),
    "flatPlotNo": FieldRule("Flat/Plot Number", max_length=50),
    "landmark": FieldRule("Landmark", max_length=100),
    "locality": FieldRule("Locality", required=True),
    "city": FieldRule("City", required=True),
    "state": FieldRule("State", required=True),
    "district": FieldRule("District"),
    "pinCode": FieldRule(
        "PIN Code",
        required=True,
        pattern=re.compile(r"^\d{6}$"),
        pattern_message="PIN code must be exactly 6 digits",
    ),
    "latitude": FieldRule("Latitude", min=-90, max=90),
    "longitude": FieldRule("Longitude", min=-180, max=180),
    "coordinates": FieldRule("Map Location", custom=_check_coordinates),
    # Rental and sale
    "rentAmount": FieldRule("Monthly Rent", required=True, min=1),
    "securityDeposit": FieldRule("Security Deposit", min=0),
    "maintenanceCharges": FieldRule("Maintenance Charges", min=0),
    "rentNegotiable": FieldRule("Rent Negotiable"),
    "availableFrom": FieldRule("Available From", required=True, custom=_date_check("Available From")),
    "preferredTenants": FieldRule(
        "Preferred Tenants", required=True, custom=_at_least_one("Select at least one preferred tenant")
    ),
    "furnishing": FieldRule("Furnishing", required=True),
    "leaseDuration": FieldRule("Lease Duration", required=True),
    "expectedPrice": FieldRule("Expected Price", required=True, min=1),
    "priceNegotiable": FieldRule("Price Negotiable"),
    "possessionDate": FieldRule("Possession Date", required=True, custom=_date_check("Possession Date")),
    # Features
    "amenities": FieldRule("Amenities", required=True, custom=_at_least_one("Select at least one amenity")),
    "parking": FieldRule("Parking"),
    "propertyShowOption": FieldRule("Property Show Option"),
    "secondaryNumber": FieldRule(
        "Secondary Number",
        pattern=re.compile(r"^\d{10}$"),
        pattern_message="Phone number must be exactly 10 digits",
    ),
    # PG / hostel
    "roomType": FieldRule("Room Type", required=True),
    "roomCapacity": FieldRule("Room Capacity", required=True, custom=_check_room_capacity),
    "genderPreference": FieldRule("Gender Preference", required=True),
    "mealOption": FieldRule("Meal Option", required=True),
    # Coworking
    "spaceType": FieldRule("Space Type", required=True),
    "capacity": FieldRule("Capacity", required=True, custom=_check_capacity),
    "operatingHours": FieldRule("Operating Hours"),
    # Land
    "landType": FieldRule("Land Type", required=True),
    "plotArea": FieldRule("Plot Area", required=True, min=1),
    "areaUnit": FieldRule("Area Unit"),
    "plotLength": FieldRule("Plot Length", min=1),
    "plotWidth": FieldRule("Plot Width", min=1),
    "approvalStatus": FieldRule("Approval Status", required=True),
    "roadAccess": FieldRule("Road Access", required=True),
    "boundaryStatus": FieldRule("Boundary Status"),
})
