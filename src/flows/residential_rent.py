from typing import Any, Mapping

from src.core.enums import Category, FlowType, ListingType
from src.core.models import FlowContext, FormData
from src.flows.base import BaseFlowService, as_flow_context, contains_any, has_pg_token


class ResidentialRentFlowService(BaseFlowService):
    """Apartments, houses and villas for rent."""

    flow_type = FlowType.RESIDENTIAL_RENT

    @staticmethod
    def _is_residential_rent(text: str) -> bool:
        return (
            "residential" in text
            and "rent" in text
            and not contains_any(text, ("sale", "sell", "flatmate"))
            and not has_pg_token(text)
        )

    def detect_flow(self, form_data: FormData, context: FlowContext | Mapping[str, Any] | None) -> bool:
        context = as_flow_context(context)
        if self.matches_explicit_flow_type(form_data):
            return True
        if self.matches_meta(form_data, Category.RESIDENTIAL, ListingType.RENT):
            return True
        if self._is_residential_rent(self.url_path(context)):
            return True
        if self._is_residential_rent(self.ad_type(context)):
            return True
        if self.has_step_content(form_data):
            return True
        # A rent amount without an asking price
        return bool(form_data.get("rentAmount")) and not form_data.get("expectedPrice")
