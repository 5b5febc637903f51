"""Tests for shared serialization utilities."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from listing_flows.models.base import PropertyRecord, ValidationResult
from listing_flows.models.enums import FlowType
from listing_flows.sinks.serialization import dataclass_to_dict, serialize_value, to_dict


@dataclass
class _AuditLine:
    flow: FlowType
    price: Decimal
    checked_on: date


class TestToDict:
    """Tests for to_dict function."""

    def test_dataclass(self) -> None:
        line = _AuditLine(flow=FlowType.LAND_SALE, price=Decimal("2500000"), checked_on=date(2025, 5, 1))

        assert to_dict(line) == {"flow": "land_sale", "price": 2500000.0, "checked_on": "2025-05-01"}

    def test_property_record(self) -> None:
        record = PropertyRecord(id="p1", price=100.0, property_details={"steps": {}}, images=["a.jpg"])

        result = to_dict(record)

        assert result["id"] == "p1"
        assert result["property_details"] == {"steps": {}}
        assert result["images"] == ["a.jpg"]

    def test_dict_values_serialized(self) -> None:
        row = {"flow_type": FlowType.RESIDENTIAL_RENT, "price": Decimal("1.5")}

        assert to_dict(row) == {"flow_type": "residential_rent", "price": 1.5}

    def test_other_type(self) -> None:
        assert to_dict(42) == {"value": "42"}

    def test_dataclass_class_is_not_an_instance(self) -> None:
        assert to_dict(PropertyRecord) == {"value": str(PropertyRecord)}


class TestDataclassToDict:
    def test_nested_dict(self) -> None:
        result = dataclass_to_dict(ValidationResult(is_valid=False, errors={"city": "City is required"}))

        assert result == {"is_valid": False, "errors": {"city": "City is required"}, "step_id": None}


class TestSerializeValue:
    """Tests for serialize_value function."""

    def test_decimal(self) -> None:
        assert serialize_value(Decimal("99.50")) == 99.5

    def test_enum(self) -> None:
        assert serialize_value(FlowType.COMMERCIAL_SALE) == "commercial_sale"

    def test_datetime(self) -> None:
        assert serialize_value(datetime(2025, 6, 15, 10, 30)) == "2025-06-15T10:30:00"

    def test_date(self) -> None:
        assert serialize_value(date(2025, 6, 15)) == "2025-06-15"

    def test_nested(self) -> None:
        value = {"steps": [Decimal("1"), (FlowType.LAND_SALE, None)]}

        assert serialize_value(value) == {"steps": [1.0, ["land_sale", None]]}

    def test_passthrough(self) -> None:
        assert serialize_value("hello") == "hello"
        assert serialize_value(None) is None
