"""Tests for FlowServiceFactory."""

import logging

import pytest

from src.core.aliases import LISTING_TYPE_ALIASES
from src.core.enums import FlowType, ListingType
from src.core.errors import FlowDetectionError, UnknownFlowTypeError
from src.core.models import FlowContext
from src.flows import (
    CommercialRentFlowService,
    LandSaleFlowService,
    PGHostelFlowService,
    ResidentialRentFlowService,
)
from src.flows.factory import FlowServiceFactory


LISTING_TYPE_FLOWS = {
    ListingType.RENT: ("residential", FlowType.RESIDENTIAL_RENT),
    ListingType.SALE: ("residential", FlowType.RESIDENTIAL_SALE),
    ListingType.FLATMATES: ("residential", FlowType.RESIDENTIAL_FLATMATES),
    ListingType.PGHOSTEL: ("residential", FlowType.RESIDENTIAL_PGHOSTEL),
    ListingType.COWORKING: ("commercial", FlowType.COMMERCIAL_COWORKING),
}


class TestGetFlowService:
    def test_commercial_rent_from_flow_meta(self):
        form = {"flow": {"category": "commercial", "listingType": "rent"}, "steps": {}, "rentAmount": 50000}
        service = FlowServiceFactory.get_flow_service(form, FlowContext())

        assert isinstance(service, CommercialRentFlowService)
        rental = service.format_data(form).steps["com_rent_rental"]
        assert rental["rentAmount"] == 50000
        assert rental["preferredTenants"] == ["Company", "Startup"]

    def test_land_sale_from_url(self, land_sale_form):
        context = FlowContext(url_path="/properties/list/land/sale/land_details")
        service = FlowServiceFactory.get_flow_service(land_sale_form, context)

        assert isinstance(service, LandSaleFlowService)
        details = service.format_data(land_sale_form).steps["land_sale_basic_details"]
        assert details["builtUpArea"] == 2400
        assert "Residential Plot for Sale in" in details["title"]

    def test_pg_mode_flag_overrides_rent_looking_form(self, residential_rent_form):
        rent_service = FlowServiceFactory.get_flow_service(residential_rent_form, FlowContext())
        assert isinstance(rent_service, ResidentialRentFlowService)

        service = FlowServiceFactory.get_flow_service(residential_rent_form, FlowContext(is_pg_hostel_mode=True))
        assert isinstance(service, PGHostelFlowService)

    def test_pg_url_overrides_explicit_flow_type(self, make_form):
        form = make_form("residential_rent")
        context = {"urlPath": "/properties/list/residential/pghostel/room_details"}
        assert FlowServiceFactory.get_flow_service(form, context).get_flow_type() == "residential_pghostel"

    def test_pg_listing_type_override(self):
        form = {"flow": {"category": "residential", "listingType": "pg-hostel"}}
        assert isinstance(FlowServiceFactory.get_flow_service(form), PGHostelFlowService)

    @pytest.mark.parametrize("alias, listing_type", sorted(LISTING_TYPE_ALIASES.items()))
    def test_every_listing_type_alias_in_flow_meta(self, alias, listing_type):
        category, expected = LISTING_TYPE_FLOWS[listing_type]
        form = {"flow": {"category": category, "listingType": alias}, "steps": {}}

        assert FlowServiceFactory.get_flow_service(form, {}).flow_type == expected

    def test_coworking_wins_over_commercial_rent(self):
        context = FlowContext(url_path="/properties/list/commercial/coworking/details")
        form = {"flow": {"category": "commercial", "listingType": "rent"}}
        assert FlowServiceFactory.get_flow_service(form, context).flow_type == FlowType.COMMERCIAL_COWORKING

    def test_flatmates_wins_over_residential_rent(self):
        context = FlowContext(url_path="/properties/list/residential/flatmates/details")
        form = {"rentAmount": 9000}
        assert FlowServiceFactory.get_flow_service(form, context).flow_type == FlowType.RESIDENTIAL_FLATMATES

    def test_commercial_sale_wins_over_residential_sale_mode(self):
        context = FlowContext(url_path="/properties/list/commercial/sale/details", is_sale_mode=True)
        assert FlowServiceFactory.get_flow_service({}, context).flow_type == FlowType.COMMERCIAL_SALE

    def test_sale_mode_flag(self):
        context = FlowContext(is_sale_mode=True)
        assert FlowServiceFactory.get_flow_service({}, context).flow_type == FlowType.RESIDENTIAL_SALE

    @pytest.mark.parametrize("flow_type", [flow_type.value for flow_type in FlowType])
    def test_explicit_flow_type(self, flow_type, make_form):
        assert FlowServiceFactory.get_flow_service(make_form(flow_type)).get_flow_type() == flow_type

    def test_step_content(self):
        form = {"steps": {"com_sale_sale_details": {"expectedPrice": 20000000}}}
        assert FlowServiceFactory.get_flow_service(form).flow_type == FlowType.COMMERCIAL_SALE

    def test_raises_when_nothing_matches(self):
        with pytest.raises(FlowDetectionError) as exc_info:
            FlowServiceFactory.get_flow_service(
                {"flow": {"category": "unknown"}},
                FlowContext(url_path="/somewhere", ad_type="banner"),
            )

        error = exc_info.value
        assert error.url_path == "/somewhere"
        assert error.ad_type == "banner"
        assert error.flow_meta == {"category": "unknown"}
        assert "/somewhere" in str(error)

    def test_raises_on_empty_input(self):
        with pytest.raises(FlowDetectionError):
            FlowServiceFactory.get_flow_service(None)

    def test_logs_detected_flow(self, residential_rent_form, caplog):
        with caplog.at_level(logging.INFO):
            FlowServiceFactory.get_flow_service(residential_rent_form)
        assert "residential_rent" in caplog.text


class TestGetFlowServiceByType:
    @pytest.mark.parametrize("flow_type", list(FlowType))
    def test_every_flow_type(self, flow_type):
        assert FlowServiceFactory.get_flow_service_by_type(flow_type).flow_type == flow_type

    @pytest.mark.parametrize(
        "alias, expected",
        [
            ("residential_sell", FlowType.RESIDENTIAL_SALE),
            ("residential_pg", FlowType.RESIDENTIAL_PGHOSTEL),
            ("residential_hostel", FlowType.RESIDENTIAL_PGHOSTEL),
            ("commercial_co-working", FlowType.COMMERCIAL_COWORKING),
            ("coworking", FlowType.COMMERCIAL_COWORKING),
            ("Land_Sale", FlowType.LAND_SALE),
        ],
    )
    def test_aliases(self, alias, expected):
        assert FlowServiceFactory.get_flow_service_by_type(alias).flow_type == expected

    def test_unknown_type_lists_valid_types(self):
        with pytest.raises(UnknownFlowTypeError) as exc_info:
            FlowServiceFactory.get_flow_service_by_type("residential_lease")

        error = exc_info.value
        assert error.flow_type == "residential_lease"
        assert "residential_rent" in error.known_types
        assert "land_sale" in str(error)

    def test_unknown_type_is_value_error(self):
        with pytest.raises(ValueError):
            FlowServiceFactory.get_flow_service_by_type("land_rent")


class TestGetService:
    @pytest.mark.parametrize(
        "category, listing_type",
        [
            ("residential", "rent"),
            ("residential", "sale"),
            ("residential", "flatmates"),
            ("residential", "pghostel"),
            ("commercial", "rent"),
            ("commercial", "sale"),
            ("commercial", "coworking"),
            ("land", "sale"),
        ],
    )
    def test_supported_pairs(self, category, listing_type):
        service = FlowServiceFactory.get_service(category, listing_type)
        assert service.get_flow_type() == f"{category}_{listing_type}"

    @pytest.mark.parametrize(
        "category, listing_type, expected",
        [
            ("residential", "sell", "residential_sale"),
            ("residential", "pg", "residential_pghostel"),
            ("residential", "hostel", "residential_pghostel"),
            ("residential", "flatmate", "residential_flatmates"),
            ("Commercial", "Co-Working", "commercial_coworking"),
            ("plot", "sell", "land_sale"),
        ],
    )
    def test_alias_pairs(self, category, listing_type, expected):
        assert FlowServiceFactory.get_service(category, listing_type).get_flow_type() == expected

    @pytest.mark.parametrize("category, listing_type", [("land", "rent"), ("villa", "rent"), ("residential", "")])
    def test_unknown_pairs(self, category, listing_type):
        with pytest.raises(UnknownFlowTypeError):
            FlowServiceFactory.get_service(category, listing_type)


class TestRegistry:
    def test_priority_order(self):
        assert FlowServiceFactory.get_flow_types() == [
            "residential_pghostel",
            "commercial_coworking",
            "land_sale",
            "residential_flatmates",
            "commercial_sale",
            "commercial_rent",
            "residential_sale",
            "residential_rent",
        ]

    def test_get_all_services_returns_copy(self):
        services = FlowServiceFactory.get_all_services()
        services.clear()
        assert len(FlowServiceFactory.get_all_services()) == 8
