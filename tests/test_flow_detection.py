"""Tests for stored-listing flow detection."""

import json

import pytest

from src.core.enums import FlowType
from src.core.flow_detection import (
    detect_flow_type,
    get_flow_category,
    get_flow_type_display_name,
    get_listing_type,
    is_sale_property,
    load_property_details,
)


class TestLoadPropertyDetails:
    def test_dict(self):
        assert load_property_details({"a": 1}) == {"a": 1}

    def test_json_string(self):
        assert load_property_details('{"flowType": "land_sale"}') == {"flowType": "land_sale"}

    @pytest.mark.parametrize("value", [None, "", "not json", "[1, 2]", 42])
    def test_unusable_values(self, value):
        assert load_property_details(value) == {}


class TestDetectFlowType:
    def test_flow_block_wins(self):
        row = {
            "flow_type": "residential_rent",
            "property_details": {"flow": {"flowType": "commercial_sale"}, "flowType": "land_sale"},
        }
        assert detect_flow_type(row) == FlowType.COMMERCIAL_SALE

    def test_document_root_flow_type(self):
        row = {"flow_type": "residential_rent", "property_details": {"flowType": "land_sale"}}
        assert detect_flow_type(row) == FlowType.LAND_SALE

    def test_row_flow_type(self):
        assert detect_flow_type({"flow_type": "commercial_coworking"}) == FlowType.COMMERCIAL_COWORKING
        assert detect_flow_type({"flowType": "residential_sell"}) == FlowType.RESIDENTIAL_SALE

    def test_json_string_details(self):
        row = {"property_details": json.dumps({"flow": {"flowType": "residential_pghostel"}})}
        assert detect_flow_type(row) == FlowType.RESIDENTIAL_PGHOSTEL

    def test_unknown_explicit_type_is_skipped(self):
        row = {"flow_type": "villa_rent", "property_details": {"steps": {"com_rent_rental": {}}}}
        assert detect_flow_type(row) == FlowType.COMMERCIAL_RENT

    def test_first_step_key_prefix(self):
        row = {"property_details": {"steps": {"res_flat_basic_details": {}, "res_rent_rental": {}}}}
        assert detect_flow_type(row) == FlowType.RESIDENTIAL_FLATMATES

    @pytest.mark.parametrize(
        "details, expected",
        [
            ({"pgDetails": {"foodIncluded": True}}, FlowType.RESIDENTIAL_PGHOSTEL),
            ({"flatmateDetails": {"occupancy": "Single"}}, FlowType.RESIDENTIAL_FLATMATES),
            ({"coworkingDetails": {"capacity": 10}}, FlowType.COMMERCIAL_COWORKING),
            ({"basicDetails": {"propertyType": "Land"}}, FlowType.LAND_SALE),
            ({"steps": {"pg_details": {}}}, FlowType.RESIDENTIAL_PGHOSTEL),
            ({"basicDetails": {"propertyType": "Apartment"}}, FlowType.RESIDENTIAL_RENT),
            ({}, FlowType.RESIDENTIAL_RENT),
        ],
    )
    def test_characteristics(self, details, expected):
        assert detect_flow_type({"property_details": details}) == expected


class TestFlowTypeHelpers:
    def test_display_names(self):
        assert get_flow_type_display_name(FlowType.LAND_SALE) == "Land/Plot Sale"
        assert get_flow_type_display_name("residential_pghostel") == "PG/Hostel"
        assert get_flow_type_display_name("holiday_rent") == "Holiday Rent"

    @pytest.mark.parametrize(
        "flow_type, is_sale, category, listing_type",
        [
            (FlowType.RESIDENTIAL_SALE, True, "residential", "sale"),
            (FlowType.LAND_SALE, True, "land", "sale"),
            ("commercial_coworking", False, "commercial", "rent"),
            ("residential_pghostel", False, "residential", "rent"),
        ],
    )
    def test_classification(self, flow_type, is_sale, category, listing_type):
        assert is_sale_property(flow_type) is is_sale
        assert get_flow_category(flow_type) == category
        assert get_listing_type(flow_type) == listing_type
