"""Tests for listing models and enums."""

import pytest

from listing_flows.models import (
    FieldKind,
    FlowCategory,
    FlowType,
    FlowValidationResult,
    ListingCompleteness,
    PropertyRecord,
    StepIds,
    ValidationResult,
)


class TestFlowType:
    """Tests for FlowType."""

    def test_eight_flows(self) -> None:
        assert len(FlowType) == 8
        assert FlowType.RESIDENTIAL_PGHOSTEL.value == "residential_pghostel"

    def test_is_str(self) -> None:
        assert FlowType.LAND_SALE == "land_sale"

    @pytest.mark.parametrize(
        "hint,expected",
        [
            ("land_sale", FlowType.LAND_SALE),
            (" Commercial_Rent ", FlowType.COMMERCIAL_RENT),
            (FlowType.RESIDENTIAL_SALE, FlowType.RESIDENTIAL_SALE),
            ("villa_rent", None),
            ("", None),
            (None, None),
            (3, None),
        ],
    )
    def test_from_hint(self, hint, expected) -> None:
        assert FlowType.from_hint(hint) is expected

    def test_parse(self) -> None:
        assert FlowType.parse("commercial_coworking") is FlowType.COMMERCIAL_COWORKING


class TestPropertyRecord:
    """Tests for PropertyRecord."""

    def test_from_dict_snake_case(self) -> None:
        record = PropertyRecord.from_dict(
            {"id": "p1", "owner_id": "o1", "price": 100, "property_details": {"a": 1}, "flow_type": "land_sale"}
        )

        assert record.id == "p1"
        assert record.owner_id == "o1"
        assert record.property_details == {"a": 1}
        assert record.flow_type == "land_sale"
        assert record.images == []

    def test_from_dict_camel_case(self) -> None:
        record = PropertyRecord.from_dict(
            {"id": 7, "ownerId": "o2", "propertyDetails": '{"x": 1}', "flowType": "residential_sale"}
        )

        assert record.id == "7"
        assert record.owner_id == "o2"
        assert record.property_details == '{"x": 1}'
        assert record.flow_type == "residential_sale"

    def test_to_dict_round_trips_row(self) -> None:
        row = {
            "id": "p1",
            "owner_id": "o1",
            "price": 5.0,
            "property_details": {"steps": {}},
            "flow_type": None,
            "title": "Plot",
            "images": ["a.jpg"],
        }

        assert PropertyRecord.from_dict(row).to_dict() == row

    def test_is_frozen(self) -> None:
        record = PropertyRecord(id="p1")
        with pytest.raises(AttributeError):
            record.price = 10  # type: ignore[misc]


class TestValidationResults:
    """Tests for ValidationResult and FlowValidationResult."""

    def test_from_errors_empty_is_valid(self) -> None:
        result = ValidationResult.from_errors({}, step_id="res_rent_location")

        assert result.is_valid is True
        assert result.errors == {}
        assert result.step_id == "res_rent_location"

    def test_from_errors_copies(self) -> None:
        errors = {"city": "City is required"}
        result = ValidationResult.from_errors(errors)
        errors.clear()

        assert result.is_valid is False
        assert result.errors == {"city": "City is required"}

    def test_flow_result(self) -> None:
        result = FlowValidationResult(
            flow_type=FlowType.LAND_SALE,
            steps={
                "land_sale_basic_details": ValidationResult(is_valid=True),
                "land_sale_location": ValidationResult(is_valid=False, errors={"city": "City is required"}),
            },
        )

        assert result.all_valid is False
        assert result.invalid_steps == ["land_sale_location"]


class TestMisc:
    def test_step_ids_default_none(self) -> None:
        assert StepIds().rental is None

    def test_completeness(self) -> None:
        done = ListingCompleteness(flow_type=FlowType.LAND_SALE, missing_steps=[], has_images=True)
        no_images = ListingCompleteness(flow_type=FlowType.LAND_SALE, missing_steps=[], has_images=False)

        assert done.is_complete is True
        assert no_images.is_complete is False

    def test_enums(self) -> None:
        assert FlowCategory("land") is FlowCategory.LAND
        assert FieldKind.CURRENCY.value == "currency"
