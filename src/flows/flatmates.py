from typing import Any, Mapping

from src.core.aliases import normalize_listing_type
from src.core.enums import FlowType, ListingType
from src.core.models import FlowContext, FormData
from src.flows.base import BaseFlowService, as_flow_context, contains_any

FLATMATE_TOKENS = ("flatmate", "flat-mate")


class ResidentialFlatmatesFlowService(BaseFlowService):
    """Rooms offered to flatmates in a shared residence."""

    flow_type = FlowType.RESIDENTIAL_FLATMATES

    def detect_flow(self, form_data: FormData, context: FlowContext | Mapping[str, Any] | None) -> bool:
        context = as_flow_context(context)
        if self.matches_explicit_flow_type(form_data):
            return True
        if normalize_listing_type(self.meta_listing_type(form_data)) == ListingType.FLATMATES:
            return True
        if contains_any(self.meta_listing_type(form_data), FLATMATE_TOKENS):
            return True
        if contains_any(self.url_path(context), FLATMATE_TOKENS):
            return True
        if contains_any(self.ad_type(context), FLATMATE_TOKENS):
            return True
        return self.has_step_content(form_data, ("flatmate_details",))
