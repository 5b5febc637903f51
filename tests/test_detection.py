"""Tests for flow type detection."""

import json
import logging

import pytest

from listing_flows.flows.detection import (
    FlowClassifier,
    detect_flow_type,
    get_flow_category,
    get_flow_display_name,
    get_listing_type,
    is_sale_property,
)
from listing_flows.models.base import PropertyRecord
from listing_flows.models.enums import FlowCategory, FlowType, ListingType


def _row(details) -> dict:
    return {"id": "p1", "property_details": details}


class TestDetectionTotality:
    """Detection always returns one of the eight flows."""

    @pytest.mark.parametrize(
        "record",
        [
            None,
            {},
            "not a record",
            _row(None),
            _row({}),
            _row("{not json"),
            _row("[1, 2, 3]"),
            _row({"steps": "broken"}),
            _row({"steps": {}}),
            _row({"flow": "land_sale"}),
        ],
    )
    def test_defaults_to_residential_rent(self, record) -> None:
        assert detect_flow_type(record) is FlowType.RESIDENTIAL_RENT


class TestHints:
    """Explicit hints win over everything else."""

    def test_flow_hint_beats_step_prefix(self) -> None:
        record = _row({"flow": {"flowType": "land_sale"}, "steps": {"res_rent_basic_details": {}}})

        assert detect_flow_type(record) is FlowType.LAND_SALE

    def test_hint_order(self) -> None:
        record = {
            "flowType": "commercial_rent",
            "property_details": {"flow": {"flowType": "residential_sale"}, "flowType": "land_sale"},
        }

        assert detect_flow_type(record) is FlowType.RESIDENTIAL_SALE

    def test_details_flow_type(self) -> None:
        assert detect_flow_type(_row({"flowType": "commercial_sale"})) is FlowType.COMMERCIAL_SALE

    def test_row_flow_type_snake_case(self) -> None:
        record = {"flow_type": "residential_flatmates", "property_details": {}}

        assert detect_flow_type(record) is FlowType.RESIDENTIAL_FLATMATES

    def test_property_record(self) -> None:
        record = PropertyRecord(id="p1", flow_type="commercial_coworking")

        assert detect_flow_type(record) is FlowType.COMMERCIAL_COWORKING

    def test_unknown_hint_is_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        record = _row({"flow": {"flowType": "villa_rent"}, "steps": {"com_sale_location": {}}})

        with caplog.at_level(logging.DEBUG, logger="listing_flows.flows.detection"):
            assert detect_flow_type(record) is FlowType.COMMERCIAL_SALE

        assert "villa_rent" in caplog.text

    def test_json_string_details(self) -> None:
        record = _row(json.dumps({"flow": {"flowType": "residential_pghostel"}}))

        assert detect_flow_type(record) is FlowType.RESIDENTIAL_PGHOSTEL


class TestStepPrefixes:
    @pytest.mark.parametrize(
        "step_id,expected",
        [
            ("res_pg_basic_details", FlowType.RESIDENTIAL_PGHOSTEL),
            ("res_flat_location", FlowType.RESIDENTIAL_FLATMATES),
            ("res_rent_features", FlowType.RESIDENTIAL_RENT),
            ("res_sale_sale_details", FlowType.RESIDENTIAL_SALE),
            ("com_rent_rental", FlowType.COMMERCIAL_RENT),
            ("com_sale_basic_details", FlowType.COMMERCIAL_SALE),
            ("com_cow_basic_details", FlowType.COMMERCIAL_COWORKING),
            ("land_sale_land_features", FlowType.LAND_SALE),
        ],
    )
    def test_prefix(self, step_id, expected) -> None:
        assert detect_flow_type(_row({"steps": {step_id: {}}})) is expected

    def test_only_first_key_counts(self) -> None:
        record = _row({"steps": {"com_sale_location": {}, "res_pg_basic_details": {}}})

        assert detect_flow_type(record) is FlowType.COMMERCIAL_SALE


class TestCharacteristics:
    def test_pg_details_section(self) -> None:
        assert detect_flow_type(_row({"pgDetails": {"roomType": "Single"}})) is FlowType.RESIDENTIAL_PGHOSTEL

    def test_pg_step_key_without_prefix(self) -> None:
        record = _row({"steps": {"legacy_pg_details": {}}})

        assert detect_flow_type(record) is FlowType.RESIDENTIAL_PGHOSTEL

    def test_flatmate_section(self) -> None:
        assert detect_flow_type(_row({"flatmateDetails": {"occupancy": 2}})) is FlowType.RESIDENTIAL_FLATMATES

    def test_coworking_section(self) -> None:
        assert detect_flow_type(_row({"coworkingDetails": {"capacity": 20}})) is FlowType.COMMERCIAL_COWORKING

    def test_land_property_type(self) -> None:
        record = _row({"basicDetails": {"propertyType": "Land"}})

        assert detect_flow_type(record) is FlowType.LAND_SALE

    def test_land_step_key(self) -> None:
        assert detect_flow_type(_row({"steps": {"old_land_step": {}}})) is FlowType.LAND_SALE

    def test_priority_pg_before_land(self) -> None:
        record = _row({"landDetails": {"plotArea": 1}, "pgDetails": {"roomType": "Single"}})

        assert detect_flow_type(record) is FlowType.RESIDENTIAL_PGHOSTEL

    def test_empty_object_counts_as_present(self) -> None:
        assert detect_flow_type(_row({"coworkingDetails": {}})) is FlowType.COMMERCIAL_COWORKING

    def test_falsy_section_ignored(self) -> None:
        assert detect_flow_type(_row({"pgDetails": None, "landDetails": ""})) is FlowType.RESIDENTIAL_RENT


class TestFlowClassifier:
    def test_detect_with_signal(self) -> None:
        classifier = FlowClassifier()

        assert classifier.detect_with_signal(_row({"flowType": "land_sale"})) == (FlowType.LAND_SALE, "hint")
        assert classifier.detect_with_signal(_row({"steps": {"com_cow_location": {}}})) == (
            FlowType.COMMERCIAL_COWORKING,
            "step_prefix",
        )
        assert classifier.detect_with_signal(_row({"landDetails": {"a": 1}})) == (
            FlowType.LAND_SALE,
            "characteristics",
        )
        assert classifier.detect_with_signal(None) == (FlowType.RESIDENTIAL_RENT, "default")

    def test_does_not_mutate_record(self, rent_record: dict) -> None:
        before = json.dumps(rent_record, sort_keys=True)
        FlowClassifier().detect(rent_record)

        assert json.dumps(rent_record, sort_keys=True) == before


class TestFlowHelpers:
    @pytest.mark.parametrize(
        "flow,name",
        [
            ("residential_rent", "Residential Rent"),
            ("residential_pghostel", "PG/Hostel"),
            ("residential_flatmates", "Flatmates"),
            (FlowType.COMMERCIAL_COWORKING, "Coworking Space"),
            ("land_sale", "Land/Plot Sale"),
            ("holiday_home", "Holiday Home"),
        ],
    )
    def test_display_name(self, flow, name) -> None:
        assert get_flow_display_name(flow) == name

    def test_category(self) -> None:
        assert get_flow_category("commercial_sale") is FlowCategory.COMMERCIAL
        assert get_flow_category(FlowType.LAND_SALE) is FlowCategory.LAND
        assert get_flow_category("whatever") is FlowCategory.RESIDENTIAL

    def test_listing_type(self) -> None:
        assert get_listing_type("land_sale") is ListingType.SALE
        assert get_listing_type(FlowType.RESIDENTIAL_PGHOSTEL) is ListingType.RENT

    def test_is_sale_property(self) -> None:
        assert is_sale_property(FlowType.COMMERCIAL_SALE) is True
        assert is_sale_property("commercial_coworking") is False
