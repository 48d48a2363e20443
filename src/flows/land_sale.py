from typing import Any, Mapping

from src.config import app_config
from src.core.enums import Category, FlowType
from src.core.fields import LAND_DETAILS_FIELDS
from src.core.models import FlowContext, FormData
from src.flows.base import BaseFlowService, as_flow_context, contains_any
from src.logger_setup import get_logger

logger = get_logger(__name__)

LAND_TOKENS = ("land", "plot")
SALE_TOKENS = ("sale", "sell")
PLACEHOLDER_TITLES = ("New Property",)


def _to_number(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class LandSaleFlowService(BaseFlowService):
    """Land and plot sales."""

    flow_type = FlowType.LAND_SALE
    field_overrides = {"basic_details": LAND_DETAILS_FIELDS}

    def detect_flow(self, form_data: FormData, context: FlowContext | Mapping[str, Any] | None) -> bool:
        context = as_flow_context(context)
        if self.matches_explicit_flow_type(form_data):
            return True
        if self.meta_category(form_data) == Category.LAND:
            return True
        url_path = self.url_path(context)
        if contains_any(url_path, LAND_TOKENS) and contains_any(url_path, SALE_TOKENS):
            return True
        if contains_any(self.ad_type(context), LAND_TOKENS):
            return True
        return self.has_step_content(form_data, ("land_features",)) or self.has_step_content(form_data)

    def extract_basic_details_data(self, form_data: FormData) -> dict[str, Any]:
        details = super().extract_basic_details_data(form_data)

        if details.get("builtUpArea") in (None, ""):
            length = _to_number(details.get("plotLength"))
            width = _to_number(details.get("plotWidth"))
            if length is not None and width is not None:
                details["builtUpArea"] = round(length * width)
                details.setdefault("builtUpAreaUnit", "sqft")
                logger.debug(f"[{self.get_flow_type()}] Computed plot area {details['builtUpArea']}")
        return details

    def post_process_steps(self, steps: dict[str, dict[str, Any]], form_data: FormData) -> None:
        details = steps[self.get_step_key("basic_details")]
        title = details.get("title")
        if title and title not in PLACEHOLDER_TITLES:
            return

        location = steps.get(self.get_step_key("location"), {})
        land_type = details.get("landType") or "Land"
        city = location.get("city") or location.get("locality") or app_config.default_city
        details["title"] = f"{land_type} for Sale in {city}"
