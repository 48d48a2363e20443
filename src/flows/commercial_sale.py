from typing import Any, Mapping

from src.core.enums import Category, FlowType, ListingType
from src.core.fields import BASIC_DETAILS_FIELDS, COMMERCIAL_DETAILS_FIELDS
from src.core.models import FlowContext, FormData
from src.flows.base import BaseFlowService, as_flow_context, contains_any

SALE_TOKENS = ("sale", "sell")


class CommercialSaleFlowService(BaseFlowService):
    """Commercial property for sale."""

    flow_type = FlowType.COMMERCIAL_SALE
    field_overrides = {"basic_details": BASIC_DETAILS_FIELDS + COMMERCIAL_DETAILS_FIELDS}

    @staticmethod
    def _is_commercial_sale(text: str) -> bool:
        return (
            "commercial" in text
            and contains_any(text, SALE_TOKENS)
            and not contains_any(text, ("coworking", "co-working"))
        )

    def detect_flow(self, form_data: FormData, context: FlowContext | Mapping[str, Any] | None) -> bool:
        context = as_flow_context(context)
        if self.matches_explicit_flow_type(form_data):
            return True
        if self.matches_meta(form_data, Category.COMMERCIAL, ListingType.SALE):
            return True
        if self._is_commercial_sale(self.url_path(context)):
            return True
        if self._is_commercial_sale(self.ad_type(context)):
            return True
        return self.has_step_content(form_data)
