"""Section-level extraction of listing data for display.

Each section (pricing, location, basic details, ...) is gathered with
the same cascade: the flow's step sub-object, then the legacy section
object, then the details root, then the record row.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from listing_flows.flows.detection import detect_flow_type, is_sale_property
from listing_flows.flows.steps import step_ids_for_flow
from listing_flows.formatting.formatters import to_number
from listing_flows.formatting.render import FieldFormatter
from listing_flows.lookup import get_property_details, is_empty, locate_field, record_as_mapping
from listing_flows.models.enums import FlowType

logger = logging.getLogger(__name__)

PLACEHOLDER_TITLES = {"", "New Property"}

AREA_FIELDS = {"builtUpArea": "builtUpAreaUnit", "carpetArea": "builtUpAreaUnit", "plotArea": "areaUnit", "roomSize": None}
CAPACITY_FIELDS = {"roomCapacity", "capacity"}

# Legacy sections that may hold prices, most specific first
PRICING_SECTIONS = ("saleDetails", "rentalDetails", "pricing", "pgDetails", "flatmateDetails", "landDetails", "basicDetails")

SALE_PRICE_NAMES = ("expectedPrice", "salePrice", "price")
RENT_NAMES = ("rentAmount", "monthlyRent", "expectedRent", "rent")
DEPOSIT_NAMES = ("securityDeposit", "expectedDeposit", "deposit")
COWORKING_PRICE_NAMES = ("basePrice", "deskPrice", "expectedPrice", "rentAmount", "monthlyRent")

LAND_NEARBY_FLAGS = (
    ("nearbySchool", "School"),
    ("nearbyStation", "Station"),
    ("nearbyAirport", "Airport"),
    ("nearbyHospital", "Hospital"),
    ("nearbyMarket", "Market"),
    ("nearbyHighway", "Highway"),
)
LAND_DOCUMENT_FLAGS = (
    ("titleDeed", "Title Deed"),
    ("taxReceipts", "Tax Receipts"),
    ("encumbranceCertificate", "Encumbrance Certificate"),
    ("landSurveyReport", "Land Survey Report"),
    ("conversionOrder", "Conversion Order"),
)


class PropertyExtractor:
    """Read display sections out of one property record.

    Parameters
    ----------
    record : Any
        PropertyRecord or raw row mapping.
    flow : FlowType | str | None
        Known flow; detected from the record when omitted.
    formatter : FieldFormatter | None
        Formatter used by :meth:`display`.
    """

    def __init__(
        self,
        record: Any,
        flow: FlowType | str | None = None,
        formatter: FieldFormatter | None = None,
    ) -> None:
        self.row = record_as_mapping(record)
        self.details = get_property_details(self.row)
        self.flow = FlowType.from_hint(flow) or detect_flow_type(self.row)
        self.step_ids = step_ids_for_flow(self.flow)
        self.formatter = formatter or FieldFormatter()

    def field(
        self,
        names: str | Sequence[str],
        steps: Sequence[str | None] = (),
        sections: Sequence[str] = (),
        record_keys: Sequence[str] | None = (),
        default: Any = None,
    ) -> Any:
        """Cascading lookup of one logical field.

        Record-row keys are only consulted when ``record_keys`` names them.
        """
        return locate_field(
            self.row,
            names,
            step_ids=steps,
            sections=sections,
            record_keys=record_keys,
            default=default,
            details=self.details,
        )

    @property
    def is_sale(self) -> bool:
        return is_sale_property(self.flow)

    def pricing(self) -> dict[str, Any]:
        """Price, deposit, maintenance and availability.

        The yes/no price flag is returned as ``negotiable``: keyed
        ``priceNegotiable`` it would render as money.
        """
        ids = self.step_ids
        steps = (ids.sale_details, ids.rental, ids.pg_details, ids.coworking_details, ids.basic_details)
        sections = PRICING_SECTIONS

        if self.is_sale:
            pricing = {
                "expectedPrice": self.field(
                    SALE_PRICE_NAMES, steps, sections, record_keys=("price",), default=0
                ),
                "negotiable": self.field(("priceNegotiable", "isNegotiable"), steps, sections),
                "possessionDate": self.field(("possessionDate", "possession"), steps, sections),
            }
        else:
            pricing = {
                "rentAmount": self.field(RENT_NAMES, steps, sections, record_keys=("price",), default=0),
                "securityDeposit": self.field(DEPOSIT_NAMES, steps, sections, default=0),
                "maintenanceCharges": self.field(
                    ("maintenanceCharges", "maintenanceAmount", "maintenance"), steps, sections
                ),
                "negotiable": self.field(("rentNegotiable", "isNegotiable"), steps, sections),
                "availableFrom": self.field(("availableFrom", "availableDate"), steps, sections),
            }
        return pricing

    def price(self) -> float:
        """Headline price of the listing as a number (0 when unknown)."""
        if self.flow is FlowType.COMMERCIAL_COWORKING:
            ids = self.step_ids
            amount = self.field(
                COWORKING_PRICE_NAMES,
                (ids.coworking_details, ids.basic_details),
                ("coworkingDetails",),
                record_keys=("price",),
            )
        else:
            pricing = self.pricing()
            amount = pricing.get("expectedPrice", pricing.get("rentAmount"))
        number = to_number(amount)
        return float(number) if number is not None else 0.0

    def location(self) -> dict[str, Any]:
        """Address parts and map coordinates."""
        steps = (self.step_ids.location,)
        sections = ("location",)
        coordinates = self.field("coordinates", steps, sections)
        if not isinstance(coordinates, Mapping):
            coordinates = {}

        latitude = coordinates.get("lat", coordinates.get("latitude"))
        if is_empty(latitude):
            latitude = self.field(("latitude", "lat"), steps, sections)
        longitude = coordinates.get("lng", coordinates.get("longitude"))
        if is_empty(longitude):
            longitude = self.field(("longitude", "lng"), steps, sections)

        return {
            "address": self.field("address", steps, sections, record_keys=("address",)),
            "flatPlotNo": self.field("flatPlotNo", steps, sections),
            "landmark": self.field("landmark", steps, sections),
            "locality": self.field(("locality", "area"), steps, sections),
            "city": self.field("city", steps, sections, record_keys=("city",)),
            "state": self.field("state", steps, sections, record_keys=("state",)),
            "district": self.field("district", steps, sections),
            "pinCode": self.field(("pinCode", "pincode", "zipCode"), steps, sections),
            "latitude": latitude,
            "longitude": longitude,
        }

    def basic_details(self) -> dict[str, Any]:
        """Property type, configuration, floors and area."""
        ids = self.step_ids
        steps = (ids.basic_details,)
        sections = ("basicDetails",)
        return {
            "title": self.field("title", steps, sections, record_keys=("title",)),
            "propertyType": self.field("propertyType", steps, sections),
            "bhkType": self.field(("bhkType", "bhk"), steps, sections),
            "floor": self.field("floor", steps, sections),
            "totalFloors": self.field("totalFloors", steps, sections),
            "builtUpArea": self.field(("builtUpArea", "area"), steps, sections),
            "builtUpAreaUnit": self.field("builtUpAreaUnit", steps, sections),
            "bathrooms": self.field("bathrooms", (ids.basic_details, ids.features), sections + ("features",)),
            "balconies": self.field("balconies", (ids.basic_details, ids.features), sections + ("features",)),
            "facing": self.field(("facing", "direction"), steps, sections),
            "propertyAge": self.field("propertyAge", steps, sections),
            "furnishing": self.field(
                ("furnishing", "furnishingStatus"),
                (ids.basic_details, ids.rental, ids.sale_details, ids.features),
                sections + ("rentalDetails", "saleDetails", "features"),
            ),
        }

    def amenities(self) -> list[str]:
        """Amenity names, however they were stored."""
        ids = self.step_ids
        raw = self.field(
            "amenities",
            (ids.features, ids.pg_details, ids.coworking_details, ids.basic_details),
            ("features", "amenities"),
        )
        if raw is None and isinstance(self.details.get("amenities"), (list, Mapping)):
            raw = self.details["amenities"]
        return normalize_amenities(raw)

    def pg_details(self) -> dict[str, Any]:
        ids = self.step_ids
        steps = (ids.pg_details, ids.basic_details)
        sections = ("pgDetails", "basicDetails")
        return {
            "rentAmount": self.field(RENT_NAMES, (ids.basic_details, ids.pg_details), sections, default=0),
            "securityDeposit": self.field(DEPOSIT_NAMES, (ids.basic_details, ids.pg_details), sections, default=0),
            "roomType": self.field("roomType", steps, sections),
            "roomCapacity": self.field("roomCapacity", steps, sections),
            "roomSize": self.field("roomSize", steps, sections),
            "bathroomType": self.field("bathroomType", steps, sections),
            "mealOption": self.field("mealOption", steps, sections),
            "genderPreference": self.field("genderPreference", steps, sections),
            "pgType": self.field("pgType", steps, sections),
            "rules": self.field("rules", steps, sections),
            "noticePeriod": self.field("noticePeriod", steps, sections),
        }

    def flatmate_details(self) -> dict[str, Any]:
        ids = self.step_ids
        steps = (ids.flatmate_details, ids.basic_details)
        sections = ("flatmateDetails", "basicDetails")
        return {
            "rentAmount": self.field(RENT_NAMES, steps, sections, record_keys=("price",), default=0),
            "securityDeposit": self.field(DEPOSIT_NAMES, steps, sections, default=0),
            "preferredGender": self.field(("preferredGender", "genderPreference"), steps, sections),
            "occupancy": self.field("occupancy", steps, sections),
            "roomSharing": self.field("roomSharing", steps, sections),
            "foodPreference": self.field("foodPreference", steps, sections),
            "smokingAllowed": self.field("smokingAllowed", steps, sections),
            "drinkingAllowed": self.field("drinkingAllowed", steps, sections),
            "availableFrom": self.field("availableFrom", steps, sections),
        }

    def coworking_details(self) -> dict[str, Any]:
        ids = self.step_ids
        steps = (ids.coworking_details, ids.basic_details)
        sections = ("coworkingDetails", "basicDetails")
        return {
            "basePrice": self.field(COWORKING_PRICE_NAMES, steps, sections, record_keys=("price",), default=0),
            "securityDeposit": self.field("securityDeposit", steps, sections, default=0),
            "spaceType": self.field(("spaceType", "workspaceType"), steps, sections),
            "capacity": self.field("capacity", steps, sections),
            "seatingArrangement": self.field("seatingArrangement", steps, sections),
            "meetingRooms": self.field("meetingRooms", steps, sections),
            "cabins": self.field("cabins", steps, sections),
            "operatingHours": self.field("operatingHours", steps, sections),
            "accessType": self.field("accessType", steps, sections),
            "internetSpeed": self.field("internetSpeed", steps, sections),
            "parkingAvailable": self.field("parkingAvailable", steps, sections),
        }

    def land_details(self) -> dict[str, Any]:
        ids = self.step_ids
        basic_steps = (ids.basic_details,)
        feature_steps = (ids.land_features, ids.basic_details)
        sections = ("landDetails", "basicDetails")
        return {
            "landType": self.field("landType", basic_steps, sections),
            "plotArea": self.field(("plotArea", "totalArea", "builtUpArea", "area"), basic_steps, sections),
            "areaUnit": self.field(("areaUnit", "builtUpAreaUnit"), basic_steps, sections),
            "expectedPrice": self.field(SALE_PRICE_NAMES, basic_steps, sections, record_keys=("price",), default=0),
            "plotLength": self.field("plotLength", basic_steps, sections),
            "plotWidth": self.field("plotWidth", basic_steps, sections),
            "approvalStatus": self.field("approvalStatus", feature_steps, sections),
            "boundaryStatus": self.field("boundaryStatus", feature_steps, sections),
            "roadAccess": self.field("roadAccess", feature_steps, sections),
            "cornerPlot": self.field("cornerPlot", feature_steps, sections),
            "nearbyFacilities": self._collect_flags(LAND_NEARBY_FLAGS, "nearbyFacilities"),
            "landDocuments": self._collect_flags(LAND_DOCUMENT_FLAGS, "landDocuments"),
        }

    def _collect_flags(self, flags: Sequence[tuple[str, str]], list_name: str) -> list[str]:
        """Gather yes/no land feature flags into a list of labels."""
        steps = (self.step_ids.land_features,)
        explicit = self.field(list_name, steps, ("landDetails",))
        if isinstance(explicit, list):
            return [str(item) for item in explicit if not is_empty(item)]
        return [label for key, label in flags if self.field(key, steps, ("landDetails",)) is True]

    def title(self) -> str:
        """Listing title; generated from the details when none was given."""
        explicit = self.field(
            "title", (self.step_ids.basic_details,), ("basicDetails",), record_keys=("title",)
        )
        if isinstance(explicit, str) and explicit.strip() not in PLACEHOLDER_TITLES:
            return explicit.strip()
        return generate_title(self.flow, self.basic_details(), self.location(), self.land_details())

    def display(self, section: Mapping[str, Any]) -> dict[str, str]:
        """Render every value of a section for display."""
        rendered = {}
        for key, value in section.items():
            if key in AREA_FIELDS:
                unit_key = AREA_FIELDS[key]
                unit = section.get(unit_key) if unit_key else None
                rendered[key] = self.formatter.area(value, unit if isinstance(unit, str) else None)
            elif key in CAPACITY_FIELDS:
                rendered[key] = self.formatter.capacity(value)
            else:
                rendered[key] = self.formatter.render(value, key)
        return rendered


def normalize_amenities(raw: Any) -> list[str]:
    """Amenities as a flat list of names.

    Stored as a list, a comma separated string, or a mapping of
    amenity name to a yes/no flag depending on the wizard version.
    """
    if is_empty(raw):
        return []
    if isinstance(raw, str):
        return [part.strip() for part in raw.split(",") if part.strip()]
    if isinstance(raw, Mapping):
        return [str(name) for name, enabled in raw.items() if enabled is True or enabled in ("true", "yes")]
    if isinstance(raw, (list, tuple)):
        return [str(item) for item in raw if not is_empty(item)]
    return []


def generate_title(
    flow: FlowType,
    basic: Mapping[str, Any],
    location: Mapping[str, Any],
    land: Mapping[str, Any] | None = None,
) -> str:
    """Build a title such as "2 BHK Apartment for Rent in Pune"."""
    place = location.get("city") or location.get("locality")
    if flow is FlowType.LAND_SALE:
        land_type = (land or {}).get("landType") or "Land"
        title = f"{land_type} for Sale"
    else:
        listing = "Sale" if is_sale_property(flow) else "Rent"
        kind = " ".join(
            str(part) for part in (basic.get("bhkType"), basic.get("propertyType")) if not is_empty(part)
        )
        title = f"{kind or 'Property'} for {listing}"
    if not is_empty(place):
        title = f"{title} in {place}"
    logger.debug("Generated title %r for %s listing", title, flow.value)
    return title
