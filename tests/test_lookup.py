"""Tests for tolerant record access."""

import json
import logging

import pytest

from listing_flows.lookup import (
    field_accessors,
    first_non_empty,
    get_path,
    get_property_details,
    get_steps,
    is_empty,
    locate_field,
    parse_property_details,
    record_as_mapping,
)
from listing_flows.models.base import PropertyRecord


class TestIsEmpty:
    @pytest.mark.parametrize("value", [None, "", [], (), {}])
    def test_empty(self, value) -> None:
        assert is_empty(value) is True

    @pytest.mark.parametrize("value", [0, False, " ", [None], {"a": None}, 0.0])
    def test_not_empty(self, value) -> None:
        assert is_empty(value) is False


class TestParsePropertyDetails:
    """Tests for parse_property_details."""

    def test_mapping_is_copied(self) -> None:
        details = {"a": 1}
        parsed = parse_property_details(details)

        assert parsed == details
        assert parsed is not details

    def test_json_string(self) -> None:
        assert parse_property_details('{"flowType": "land_sale"}') == {"flowType": "land_sale"}

    def test_bytes(self) -> None:
        assert parse_property_details(b'{"a": 1}') == {"a": 1}

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing(self, value) -> None:
        assert parse_property_details(value) == {}

    def test_malformed_json_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="listing_flows.lookup"):
            assert parse_property_details('{"steps": ') == {}

        assert "Unparsable property_details" in caplog.text

    @pytest.mark.parametrize("value", ["[1, 2]", "42", 42, ["a"]])
    def test_non_object(self, value) -> None:
        assert parse_property_details(value) == {}


class TestRecordAccess:
    def test_record_as_mapping(self) -> None:
        record = PropertyRecord(id="p1", price=10)

        assert record_as_mapping(record)["price"] == 10
        assert record_as_mapping({"id": "x"}) == {"id": "x"}
        assert record_as_mapping(None) == {}
        assert record_as_mapping("junk") == {}

    def test_get_property_details_camel_case(self) -> None:
        row = {"propertyDetails": json.dumps({"a": 1})}

        assert get_property_details(row) == {"a": 1}

    def test_get_steps(self) -> None:
        assert get_steps({"steps": {"res_rent_location": {}}}) == {"res_rent_location": {}}
        assert get_steps({"steps": "nope"}) == {}
        assert get_steps({}) == {}


class TestPaths:
    def test_get_path(self) -> None:
        source = {"a": {"b": {"c": 3}}}

        assert get_path(source, "a.b.c") == 3
        assert get_path(source, ("a", "b")) == {"c": 3}
        assert get_path(source, "a.x", default="-") == "-"
        assert get_path(source, "a.b.c.d") is None

    def test_first_non_empty_in_order(self) -> None:
        source = {"a": "", "b": [], "c": 0, "d": 5}

        assert first_non_empty(source, ["a", "b", "c", "d"]) == 0

    def test_first_non_empty_callable(self) -> None:
        source = {"a": None}

        assert first_non_empty(source, ["a", lambda s: "computed"]) == "computed"

    def test_first_non_empty_default(self) -> None:
        assert first_non_empty({}, ["a", "b"], default="-") == "-"

    def test_field_accessors_order(self) -> None:
        paths = field_accessors(
            ("expectedPrice", "price"),
            step_ids=("res_sale_sale_details", None),
            sections=("saleDetails",),
            record_keys=("price",),
        )

        assert paths == [
            ("details", "steps", "res_sale_sale_details", "expectedPrice"),
            ("details", "steps", "res_sale_sale_details", "price"),
            ("details", "saleDetails", "expectedPrice"),
            ("details", "saleDetails", "price"),
            ("details", "expectedPrice"),
            ("details", "price"),
            ("record", "price"),
        ]


class TestLocateField:
    """The cascade: step, legacy section, details, record, default."""

    def _record(self, **details) -> dict:
        return {"id": "p1", "price": 111, "property_details": details}

    def test_step_wins(self) -> None:
        record = self._record(
            steps={"res_sale_sale_details": {"expectedPrice": 333}},
            saleDetails={"expectedPrice": 222},
            expectedPrice=444,
        )

        value = locate_field(
            record, "expectedPrice", step_ids=("res_sale_sale_details",), sections=("saleDetails",),
            record_keys=("price",),
        )

        assert value == 333

    def test_section_before_details(self) -> None:
        record = self._record(saleDetails={"expectedPrice": 222}, expectedPrice=444)

        assert locate_field(record, "expectedPrice", sections=("saleDetails",)) == 222

    def test_details_before_record(self) -> None:
        record = self._record(price=444)

        assert locate_field(record, "price") == 444

    def test_record_fallback(self) -> None:
        record = self._record(steps={"res_sale_sale_details": {"expectedPrice": ""}})

        value = locate_field(
            record, "expectedPrice", step_ids=("res_sale_sale_details",), record_keys=("price",)
        )

        assert value == 111

    def test_default(self) -> None:
        assert locate_field({}, "expectedPrice", default=0) == 0

    def test_alternate_names_tried_per_level(self) -> None:
        record = self._record(
            steps={"res_sale_sale_details": {"salePrice": 500}},
            expectedPrice=444,
        )

        value = locate_field(
            record, ("expectedPrice", "salePrice"), step_ids=("res_sale_sale_details",)
        )

        assert value == 500

    def test_json_string_details(self) -> None:
        record = {"property_details": json.dumps({"location": {"city": "Pune"}})}

        assert locate_field(record, "city", sections=("location",)) == "Pune"

    def test_zero_is_a_value(self) -> None:
        record = self._record(steps={"s": {"floor": 0}}, floor=5)

        assert locate_field(record, "floor", step_ids=("s",)) == 0
