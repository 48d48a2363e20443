from typing import Any, Mapping

from src.core.enums import Category, FlowType, ListingType
from src.core.fields import BASIC_DETAILS_FIELDS, COMMERCIAL_DETAILS_FIELDS
from src.core.models import FlowContext, FormData
from src.flows.base import BaseFlowService, as_flow_context, contains_any

DEFAULT_PREFERRED_TENANTS = ["Company", "Startup"]


class CommercialRentFlowService(BaseFlowService):
    """Offices, shops and other commercial spaces for rent."""

    flow_type = FlowType.COMMERCIAL_RENT
    field_overrides = {"basic_details": BASIC_DETAILS_FIELDS + COMMERCIAL_DETAILS_FIELDS}

    @staticmethod
    def _is_commercial_rent(text: str) -> bool:
        return (
            "commercial" in text
            and "rent" in text
            and not contains_any(text, ("sale", "sell", "coworking", "co-working"))
        )

    def detect_flow(self, form_data: FormData, context: FlowContext | Mapping[str, Any] | None) -> bool:
        context = as_flow_context(context)
        if self.matches_explicit_flow_type(form_data):
            return True
        if self.matches_meta(form_data, Category.COMMERCIAL, ListingType.RENT):
            return True
        if self._is_commercial_rent(self.url_path(context)):
            return True
        if self._is_commercial_rent(self.ad_type(context)):
            return True
        return self.has_step_content(form_data)

    def extract_rental_data(self, form_data: FormData) -> dict[str, Any]:
        rental = super().extract_rental_data(form_data)
        if not rental.get("preferredTenants"):
            rental["preferredTenants"] = list(DEFAULT_PREFERRED_TENANTS)
        return rental
