from typing import Any, Mapping

from src.core.aliases import normalize_listing_type
from src.core.enums import FlowType, ListingType
from src.core.fields import BASIC_DETAILS_FIELDS, COMMERCIAL_DETAILS_FIELDS
from src.core.models import FlowContext, FormData
from src.flows.base import BaseFlowService, as_flow_context, contains_any

COWORKING_TOKENS = ("coworking", "co-working")


class CoworkingFlowService(BaseFlowService):
    """Commercial coworking spaces."""

    flow_type = FlowType.COMMERCIAL_COWORKING
    field_overrides = {"basic_details": BASIC_DETAILS_FIELDS + COMMERCIAL_DETAILS_FIELDS}

    def detect_flow(self, form_data: FormData, context: FlowContext | Mapping[str, Any] | None) -> bool:
        context = as_flow_context(context)
        if self.matches_explicit_flow_type(form_data):
            return True
        if normalize_listing_type(self.meta_listing_type(form_data)) == ListingType.COWORKING:
            return True
        if contains_any(self.meta_listing_type(form_data), COWORKING_TOKENS):
            return True
        if contains_any(self.url_path(context), COWORKING_TOKENS):
            return True
        if contains_any(self.ad_type(context), COWORKING_TOKENS):
            return True
        return self.has_step_content(form_data, ("coworking_details", "coworking"))
