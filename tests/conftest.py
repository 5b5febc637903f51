"""Pytest configuration and fixtures."""

import json
from typing import Any

import pytest


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def rent_details() -> dict[str, Any]:
    """Residential rent details in the current steps layout."""
    return {
        "flow": {"category": "residential", "listingType": "rent", "flowType": "residential_rent"},
        "steps": {
            "res_rent_basic_details": {
                "title": "Sunny 2 BHK near the metro",
                "propertyType": "Apartment",
                "bhkType": "2 BHK",
                "floor": 3,
                "totalFloors": 10,
                "builtUpArea": 1250,
                "builtUpAreaUnit": "sqft",
                "propertyAge": "1-3 years",
                "bathrooms": 2,
            },
            "res_rent_location": {
                "address": "12 Lake View Road, Kothrud",
                "locality": "Kothrud",
                "city": "Pune",
                "state": "Maharashtra",
                "pinCode": "411038",
                "coordinates": {"lat": 18.5074, "lng": 73.8077},
            },
            "res_rent_rental": {
                "rentAmount": 25000,
                "securityDeposit": 100000,
                "maintenanceCharges": 2500,
                "rentNegotiable": True,
                "availableFrom": "2025-05-01",
                "preferredTenants": ["Family"],
                "furnishing": "Semi Furnished",
            },
            "res_rent_features": {
                "bathrooms": 2,
                "amenities": ["Lift", "Power Backup"],
                "furnishing": "Semi Furnished",
            },
        },
    }


@pytest.fixture
def rent_record(rent_details: dict[str, Any]) -> dict[str, Any]:
    """Raw residential rent row."""
    return {
        "id": "prop-rent-001",
        "owner_id": "owner-001",
        "price": 25000,
        "property_details": rent_details,
        "images": ["https://example.com/1.jpg"],
    }


@pytest.fixture
def sale_record() -> dict[str, Any]:
    """Residential sale row without a flow hint."""
    return {
        "id": "prop-sale-001",
        "owner_id": "owner-002",
        "price": 7500000,
        "property_details": {
            "steps": {
                "res_sale_basic_details": {
                    "title": "New Property",
                    "propertyType": "Villa",
                    "bhkType": "3 BHK",
                    "floor": 0,
                    "totalFloors": 2,
                    "builtUpArea": "2400",
                    "propertyAge": "Less than 1 year",
                },
                "res_sale_location": {"city": "Hyderabad", "locality": "Jubilee Hills"},
                "res_sale_sale_details": {
                    "expectedPrice": 8500000,
                    "priceNegotiable": "yes",
                    "possessionDate": "2025-09-15",
                },
            },
        },
        "images": [],
    }


@pytest.fixture
def legacy_pg_record() -> dict[str, Any]:
    """PG listing saved with the legacy section layout."""
    return {
        "id": "prop-pg-001",
        "price": 9000,
        "property_details": {
            "basicDetails": {"propertyType": "PG", "roomType": "Double Sharing"},
            "location": {
                "address": "45 MG Road, Indiranagar",
                "city": "Bengaluru",
                "state": "Karnataka",
                "latitude": 12.9719,
                "longitude": 77.6412,
            },
            "pgDetails": {
                "roomCapacity": 2,
                "rentAmount": 9000,
                "mealOption": "All Meals",
                "genderPreference": "Female",
            },
            "features": {"amenities": "Wifi, Laundry , Power Backup"},
        },
    }


@pytest.fixture
def land_record() -> dict[str, Any]:
    """Land sale row with details stored as a JSON string."""
    details = {
        "steps": {
            "land_sale_basic_details": {
                "landType": "Agricultural Land",
                "plotArea": 43560,
                "areaUnit": "sqft",
                "expectedPrice": 2500000,
                "plotLength": 220,
                "plotWidth": 198,
            },
            "land_sale_location": {"locality": "Shamshabad", "state": "Telangana"},
            "land_sale_land_features": {
                "approvalStatus": "DTCP Approved",
                "roadAccess": "40 ft road",
                "nearbySchool": True,
                "nearbyMarket": False,
                "titleDeed": True,
            },
        },
    }
    return {"id": "prop-land-001", "price": None, "property_details": json.dumps(details)}


@pytest.fixture
def malformed_record() -> dict[str, Any]:
    """Row whose details are truncated JSON."""
    return {"id": "prop-bad-001", "price": 1200, "property_details": '{"steps": {"res_sale_'}
