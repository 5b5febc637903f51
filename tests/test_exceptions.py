"""Tests for custom exception hierarchy."""

import pytest

from listing_flows.exceptions import (
    ConfigurationError,
    ListingFlowsError,
    RecordParseError,
    SinkError,
    UnknownFlowError,
)
from listing_flows.lookup import parse_property_details
from listing_flows.models.enums import FlowType


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_listing_flows_error_is_exception(self) -> None:
        assert isinstance(ListingFlowsError("test"), Exception)

    def test_record_parse_error_is_listing_flows_error(self) -> None:
        assert isinstance(RecordParseError("test"), ListingFlowsError)

    def test_unknown_flow_is_listing_flows_error(self) -> None:
        assert isinstance(UnknownFlowError("test"), ListingFlowsError)

    def test_configuration_error_is_listing_flows_error(self) -> None:
        assert isinstance(ConfigurationError("test"), ListingFlowsError)

    def test_sink_error_is_listing_flows_error(self) -> None:
        assert isinstance(SinkError("test"), ListingFlowsError)

    def test_exception_message(self) -> None:
        err = UnknownFlowError("Unknown flow type: 'villa_rent'")
        assert str(err) == "Unknown flow type: 'villa_rent'"


class TestStrictVariants:
    """Strict helpers raise where the core degrades."""

    def test_flow_parse_raises(self) -> None:
        with pytest.raises(UnknownFlowError):
            FlowType.parse("villa_rent")

    def test_strict_details_parse_raises(self) -> None:
        with pytest.raises(RecordParseError):
            parse_property_details("{broken", strict=True)

    def test_strict_details_rejects_non_object(self) -> None:
        with pytest.raises(RecordParseError, match="JSON object"):
            parse_property_details("[1, 2]", strict=True)
