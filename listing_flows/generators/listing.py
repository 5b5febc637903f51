"""Sample property listing generator.

Produces records the way the listing wizard's auto-fill does, for every
flow, in each of the shapes found in stored data: the current ``steps``
layout, the legacy flat section layout, and details stored as a JSON
string.
"""

from __future__ import annotations

import json
import logging
import random
from typing import Any

from listing_flows.exceptions import UnknownFlowError
from listing_flows.flows.detection import get_flow_category, get_listing_type
from listing_flows.flows.steps import FLOW_PREFIXES, FLOW_STEPS
from listing_flows.generators.base import BaseGenerator
from listing_flows.models.base import PropertyRecord
from listing_flows.models.enums import FlowType

logger = logging.getLogger(__name__)

SHAPES = ("steps", "legacy", "json")

# Step name -> section key used by listings saved before the steps layout
LEGACY_SECTIONS = {
    "basic_details": "basicDetails",
    "location": "location",
    "rental": "rentalDetails",
    "sale_details": "saleDetails",
    "features": "features",
    "pg_details": "pgDetails",
    "flatmate_details": "flatmateDetails",
    "coworking_details": "coworkingDetails",
    "land_features": "landDetails",
}

# Legacy records of these flows carried no flow hint; their sections identify them
LEGACY_UNHINTED = {
    FlowType.RESIDENTIAL_PGHOSTEL,
    FlowType.RESIDENTIAL_FLATMATES,
    FlowType.COMMERCIAL_COWORKING,
    FlowType.LAND_SALE,
}

PROPERTY_TYPES = ["Apartment", "Independent House", "Villa", "Penthouse", "Studio Apartment", "Service Apartment"]
COMMERCIAL_TYPES = ["Office Space", "Shop", "Showroom", "Warehouse", "Industrial Building"]
BHK_TYPES = ["1 BHK", "2 BHK", "3 BHK", "4 BHK", "4+ BHK"]
PROPERTY_AGES = ["Less than 1 year", "1-3 years", "3-5 years", "5-10 years", "10+ years"]
FACING_OPTIONS = ["North", "South", "East", "West", "North East", "North West", "South East", "South West"]
FURNISHING_OPTIONS = ["Fully Furnished", "Semi Furnished", "Unfurnished"]
TENANT_PREFERENCES = ["Family", "Bachelor Male", "Bachelor Female", "Company", "Any"]
PARKING_OPTIONS = ["Two Wheeler", "Four Wheeler", "Both", "None"]
SHOW_OPTIONS = ["Owner", "Caretaker", "Security", "Agent"]
LEASE_DURATIONS = ["11 months", "1 year", "2 years", "3 years", "5 years"]
AMENITIES = [
    "Power Backup", "Lift", "Security", "Gas Pipeline", "Air Conditioner",
    "Internet Services", "Intercom", "Swimming Pool", "Club House",
    "Children Play Area", "Park", "Fire Safety", "Visitor Parking",
    "Water Storage", "Rain Water Harvesting",
]
ROOM_TYPES = ["Single", "Double Sharing", "Triple Sharing", "Dormitory"]
MEAL_OPTIONS = ["Breakfast Only", "Breakfast & Dinner", "All Meals", "No Meals"]
GENDER_PREFERENCES = ["Male", "Female", "Any"]
SPACE_TYPES = ["Hot Desk", "Dedicated Desk", "Private Cabin", "Meeting Room", "Virtual Office"]
LAND_TYPES = ["Residential Plot", "Commercial Plot", "Agricultural Land", "Industrial Land"]
LAND_UNITS = ["sqft", "sqyd", "acre"]
APPROVAL_STATUSES = ["DTCP Approved", "HMDA Approved", "Panchayat Approved", "Approval Pending"]
ROAD_ACCESS = ["30 ft road", "40 ft road", "60 ft road", "Highway facing"]
BOUNDARY_STATUSES = ["Fenced", "Compound Wall", "Open"]

PLACEHOLDER_TITLE_SHARE = 0.1
NO_IMAGES_SHARE = 0.15


class ListingGenerator(BaseGenerator):
    """Generate synthetic property listings for every flow.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``en_IN``).
    """

    def generate(
        self,
        flow: FlowType | str | None = None,
        shape: str = "steps",
        owner_id: str | None = None,
    ) -> PropertyRecord:
        """Generate one listing.

        Parameters
        ----------
        flow : FlowType | str | None
            Listing flow; random when omitted.
        shape : str
            ``steps`` (current wizard layout), ``legacy`` (flat sections)
            or ``json`` (steps layout stored as a JSON string).
        owner_id : str | None
            Owner of the listing; random when omitted.

        Returns
        -------
        PropertyRecord
            Generated listing.
        """
        if shape not in SHAPES:
            raise ValueError(f"shape must be one of {', '.join(SHAPES)}, got {shape!r}")
        flow_type = random.choice(list(FlowType)) if flow is None else FlowType.parse(flow)

        step_data = self.step_data(flow_type)
        price = _headline_price(flow_type, step_data)
        title = step_data[FLOW_STEPS[flow_type][0]].get("title")
        images = self._images()

        row_flow_type = None
        if shape == "legacy":
            details = self._legacy_details(flow_type, step_data)
            if flow_type not in LEGACY_UNHINTED:
                row_flow_type = flow_type.value
        else:
            details = {"steps": step_data}
            if shape == "steps":
                details = {"flow": _flow_section(flow_type), **details}

        details["images"] = images
        property_details: Any = json.dumps(details) if shape == "json" else details

        return PropertyRecord(
            id=self.fake.uuid4(),
            owner_id=owner_id or self.fake.uuid4(),
            price=price,
            property_details=property_details,
            flow_type=row_flow_type,
            title=title,
            images=images,
        )

    def generate_malformed(self, flow: FlowType | str | None = None) -> PropertyRecord:
        """Generate a listing whose stored details are truncated JSON."""
        record = self.generate(flow, shape="json")
        broken = record.property_details[: len(record.property_details) // 2]
        return PropertyRecord(
            id=record.id,
            owner_id=record.owner_id,
            price=record.price,
            property_details=broken,
            flow_type=record.flow_type,
            title=record.title,
            images=record.images,
        )

    def generate_batch(
        self,
        count: int,
        flows: list[FlowType | str] | None = None,
        legacy_share: float = 0.0,
        malformed_share: float = 0.0,
    ) -> list[PropertyRecord]:
        """Generate ``count`` listings spread over ``flows``.

        Parameters
        ----------
        count : int
            Number of listings.
        flows : list[FlowType | str] | None
            Flows to draw from (all flows when omitted).
        legacy_share : float
            Share of listings in the legacy flat layout.
        malformed_share : float
            Share of listings with unreadable details.

        Raises
        ------
        UnknownFlowError
            If ``flows`` names an unknown flow.
        """
        choices = [FlowType.parse(flow) for flow in flows] if flows else list(FlowType)
        if not choices:
            raise UnknownFlowError("No flows to generate")

        records = []
        for _ in range(count):
            flow = random.choice(choices)
            roll = random.random()
            if roll < malformed_share:
                records.append(self.generate_malformed(flow))
            elif roll < malformed_share + legacy_share:
                records.append(self.generate(flow, shape="legacy"))
            else:
                records.append(self.generate(flow, shape=random.choice(["steps", "steps", "json"])))

        logger.info("Generated %d sample listings", len(records))
        return records

    def step_data(self, flow: FlowType) -> dict[str, dict[str, Any]]:
        """Answers for every wizard step of ``flow``, keyed by step-id."""
        prefix = FLOW_PREFIXES[flow]
        builders = {
            "basic_details": self._basic_details,
            "location": lambda _flow: self._location(),
            "rental": self._rental,
            "sale_details": self._sale_details,
            "features": self._features,
            "pg_details": lambda _flow: self._pg_details(),
            "flatmate_details": lambda _flow: self._flatmate_details(),
            "coworking_details": lambda _flow: self._coworking_details(),
            "land_features": lambda _flow: self._land_features(),
        }
        return {step_id: builders[step_id[len(prefix):]](flow) for step_id in FLOW_STEPS[flow]}

    def _basic_details(self, flow: FlowType) -> dict[str, Any]:
        if flow is FlowType.LAND_SALE:
            return self._land_basic_details()
        if flow is FlowType.RESIDENTIAL_PGHOSTEL:
            data = {
                "propertyType": "PG",
                "roomType": random.choice(ROOM_TYPES),
                "roomCapacity": random.randint(1, 4),
                "roomSize": random.randint(100, 300),
                "rentAmount": random.randint(6, 25) * 500,
                "securityDeposit": random.randint(1, 4) * 5000,
            }
        elif flow is FlowType.COMMERCIAL_COWORKING:
            data = {
                "propertyType": "Coworking",
                "spaceType": random.choice(SPACE_TYPES),
                "capacity": random.randint(1, 200),
                "builtUpArea": random.randint(5, 200) * 100,
                "builtUpAreaUnit": "sqft",
            }
        else:
            total_floors = random.randint(1, 30)
            commercial = flow in (FlowType.COMMERCIAL_RENT, FlowType.COMMERCIAL_SALE)
            data = {
                "propertyType": random.choice(COMMERCIAL_TYPES if commercial else PROPERTY_TYPES),
                "floor": random.randint(0, total_floors),
                "totalFloors": total_floors,
                "builtUpArea": random.randint(4, 40) * 100,
                "builtUpAreaUnit": "sqft",
                "propertyAge": random.choice(PROPERTY_AGES),
                "facing": random.choice(FACING_OPTIONS),
            }
            if not commercial:
                data["bhkType"] = random.choice(BHK_TYPES)
                data["bathrooms"] = random.randint(1, 4)
                data["balconies"] = random.randint(0, 3)
        data["title"] = self._title(flow, data)
        return data

    def _land_basic_details(self) -> dict[str, Any]:
        length = random.randint(3, 20) * 10
        width = random.randint(3, 20) * 10
        data = {
            "propertyType": "Land",
            "landType": random.choice(LAND_TYPES),
            "plotArea": length * width,
            "areaUnit": random.choice(LAND_UNITS),
            "plotLength": length,
            "plotWidth": width,
            "expectedPrice": random.randint(10, 500) * 100_000,
            "priceNegotiable": random.random() < 0.5,
        }
        data["title"] = self._title(FlowType.LAND_SALE, data)
        return data

    def _location(self) -> dict[str, Any]:
        latitude = round(random.uniform(8.0, 34.0), 6)
        longitude = round(random.uniform(68.5, 97.0), 6)
        city = self.fake.city()
        return {
            "address": f"{random.randint(1, 999)}, {self.fake.street_name()}, {city}",
            "flatPlotNo": f"{random.choice('ABCDE')}-{random.randint(101, 1504)}",
            "landmark": f"Near {self.fake.last_name()} Park",
            "locality": self.fake.street_name(),
            "city": city,
            "state": self.fake.state(),
            "district": city,
            "pinCode": str(random.randint(110001, 855999)),
            "coordinates": {"lat": latitude, "lng": longitude},
        }

    def _rental(self, flow: FlowType) -> dict[str, Any]:
        rent = random.randint(10, 150) * 1000
        data = {
            "rentAmount": rent,
            "securityDeposit": rent * random.randint(2, 6),
            "maintenanceCharges": random.randint(0, 50) * 100,
            "rentNegotiable": random.random() < 0.5,
            "availableFrom": self._future_date(),
            "leaseDuration": random.choice(LEASE_DURATIONS),
        }
        if flow is FlowType.RESIDENTIAL_RENT:
            data["preferredTenants"] = random.sample(TENANT_PREFERENCES, k=random.randint(1, 3))
            data["furnishing"] = random.choice(FURNISHING_OPTIONS)
        return data

    def _sale_details(self, flow: FlowType) -> dict[str, Any]:
        return {
            "expectedPrice": random.randint(20, 500) * 100_000,
            "priceNegotiable": random.random() < 0.5,
            "possessionDate": self._future_date(),
            "furnishing": random.choice(FURNISHING_OPTIONS),
            "maintenanceCharges": random.randint(0, 50) * 100,
        }

    def _features(self, flow: FlowType) -> dict[str, Any]:
        data: dict[str, Any] = {"amenities": random.sample(AMENITIES, k=random.randint(1, 6))}
        if flow is not FlowType.COMMERCIAL_COWORKING:
            data["bathrooms"] = random.randint(1, 4)
            data["parking"] = random.choice(PARKING_OPTIONS)
            data["propertyShowOption"] = random.choice(SHOW_OPTIONS)
            data["secondaryNumber"] = f"9{random.randint(100000000, 999999999)}"
        if flow is FlowType.RESIDENTIAL_RENT:
            data["furnishing"] = random.choice(FURNISHING_OPTIONS)
        return data

    def _pg_details(self) -> dict[str, Any]:
        return {
            "genderPreference": random.choice(GENDER_PREFERENCES),
            "mealOption": random.choice(MEAL_OPTIONS),
            "availableFrom": self._future_date(),
            "pgType": random.choice(["PG", "Hostel", "Co-living"]),
            "noticePeriod": random.choice(["15 days", "1 month", "2 months"]),
            "rules": random.sample(["No Smoking", "No Alcohol", "No Guests After 10 PM", "No Pets"], k=2),
        }

    def _flatmate_details(self) -> dict[str, Any]:
        rent = random.randint(5, 40) * 1000
        return {
            "rentAmount": rent,
            "securityDeposit": rent * 2,
            "preferredGender": random.choice(GENDER_PREFERENCES),
            "occupancy": random.choice(["Single", "Shared"]),
            "foodPreference": random.choice(["Vegetarian", "Non-Vegetarian", "Any"]),
            "smokingAllowed": random.random() < 0.2,
            "drinkingAllowed": random.random() < 0.3,
            "availableFrom": self._future_date(),
        }

    def _coworking_details(self) -> dict[str, Any]:
        return {
            "basePrice": random.randint(4, 30) * 1000,
            "securityDeposit": random.randint(1, 5) * 10_000,
            "operatingHours": random.choice(["9 AM - 9 PM", "24x7", "8 AM - 8 PM"]),
            "meetingRooms": random.randint(0, 10),
            "internetSpeed": f"{random.choice([50, 100, 200, 500])} Mbps",
            "accessType": random.choice(["Card", "Biometric", "Key"]),
            "parkingAvailable": random.random() < 0.6,
        }

    def _land_features(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "approvalStatus": random.choice(APPROVAL_STATUSES),
            "roadAccess": random.choice(ROAD_ACCESS),
            "boundaryStatus": random.choice(BOUNDARY_STATUSES),
            "cornerPlot": random.random() < 0.3,
        }
        for key in ("nearbySchool", "nearbyHospital", "nearbyMarket", "titleDeed", "taxReceipts"):
            data[key] = random.random() < 0.5
        return data

    def _title(self, flow: FlowType, basic: dict[str, Any]) -> str:
        if random.random() < PLACEHOLDER_TITLE_SHARE:
            return "New Property"
        if flow is FlowType.LAND_SALE:
            return f"{basic['landType']} in {self.fake.street_name()}"
        kind = basic.get("bhkType") or basic.get("spaceType") or basic.get("roomType")
        name = f"{kind} {basic['propertyType']}" if kind else basic["propertyType"]
        return f"{name} in {self.fake.street_name()}"

    def _future_date(self) -> str:
        return self.fake.date_between(start_date="today", end_date="+90d").isoformat()

    def _images(self) -> list[str]:
        if random.random() < NO_IMAGES_SHARE:
            return []
        return [self.fake.image_url() for _ in range(random.randint(1, 4))]

    def _legacy_details(self, flow: FlowType, step_data: dict[str, dict[str, Any]]) -> dict[str, Any]:
        prefix = FLOW_PREFIXES[flow]
        details: dict[str, Any] = {}
        for step_id, data in step_data.items():
            section = LEGACY_SECTIONS[step_id[len(prefix):]]
            details.setdefault(section, {}).update(data)
        if flow is FlowType.LAND_SALE:
            # Legacy land listings kept the plot figures in their own section
            details["landDetails"].update(details.pop("basicDetails"))
        return details


def _flow_section(flow: FlowType) -> dict[str, str]:
    return {
        "category": get_flow_category(flow).value,
        "listingType": get_listing_type(flow).value,
        "flowType": flow.value,
    }


def _headline_price(flow: FlowType, step_data: dict[str, dict[str, Any]]) -> float:
    for data in step_data.values():
        for key in ("expectedPrice", "rentAmount", "basePrice"):
            if key in data:
                return float(data[key])
    logger.debug("No price in generated %s listing", flow.value)
    return 0.0
