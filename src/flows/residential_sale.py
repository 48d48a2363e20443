from typing import Any, Mapping

from src.core.enums import Category, FlowType, ListingType
from src.core.models import FlowContext, FormData
from src.flows.base import BaseFlowService, as_dict, as_flow_context, contains_any, has_pg_token

SALE_TOKENS = ("sale", "sell")


class ResidentialSaleFlowService(BaseFlowService):
    """Apartments, houses and villas for sale."""

    flow_type = FlowType.RESIDENTIAL_SALE

    @staticmethod
    def _is_residential_sale(text: str) -> bool:
        return (
            "residential" in text
            and contains_any(text, SALE_TOKENS)
            and not has_pg_token(text)
            and "flatmate" not in text
        )

    @staticmethod
    def _has_expected_price(form_data: FormData) -> bool:
        steps = as_dict(form_data.get("steps"))
        locations = (
            form_data,
            as_dict(steps.get("res_sale_sale_details")),
            as_dict(steps.get("sale")),
            as_dict(form_data.get("sale")),
            as_dict(as_dict(form_data.get("details")).get("saleInfo")),
        )
        return any(location.get("expectedPrice") for location in locations)

    def detect_flow(self, form_data: FormData, context: FlowContext | Mapping[str, Any] | None) -> bool:
        context = as_flow_context(context)
        if self.matches_explicit_flow_type(form_data):
            return True
        if self.matches_meta(form_data, Category.RESIDENTIAL, ListingType.SALE):
            return True
        if context.is_sale_mode:
            return True
        if self._is_residential_sale(self.url_path(context)):
            return True
        if self._is_residential_sale(self.ad_type(context)):
            return True
        return self.has_step_content(form_data) or self._has_expected_price(form_data)
