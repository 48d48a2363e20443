from typing import Any, Mapping

from src.core.enums import FlowType
from src.core.fields import PG_ROOM_FEATURE_FLAGS, PG_RULE_FLAGS, ROOM_DETAILS_FIELDS
from src.core.models import FlowContext, FormData
from src.flows.base import BaseFlowService, as_flow_context, has_pg_token


class PGHostelFlowService(BaseFlowService):
    """PG/Hostel listings: room details, location, PG facilities, features."""

    flow_type = FlowType.RESIDENTIAL_PGHOSTEL
    field_overrides = {"basic_details": ROOM_DETAILS_FIELDS}

    def matches_url(self, context: FlowContext) -> bool:
        return has_pg_token(self.url_path(context))

    def matches_mode_flag(self, context: FlowContext) -> bool:
        return bool(context.is_pg_hostel_mode)

    def matches_listing_type(self, form_data: FormData) -> bool:
        return has_pg_token(self.meta_listing_type(form_data))

    def detect_flow(self, form_data: FormData, context: FlowContext | Mapping[str, Any] | None) -> bool:
        context = as_flow_context(context)
        if self.matches_explicit_flow_type(form_data) or self.matches_listing_type(form_data):
            return True
        if self.matches_mode_flag(context):
            return True
        if self.matches_url(context):
            return True
        if has_pg_token(self.ad_type(context)):
            return True
        return self.has_step_content(form_data, ("pg_details",))

    def extract_pg_data(self, form_data: FormData) -> dict[str, Any]:
        pg_details = super().extract_pg_data(form_data)

        gender = form_data.get("gender")
        if gender and "genderPreference" not in pg_details:
            pg_details["genderPreference"] = gender

        rules = [label for flag, label in PG_RULE_FLAGS.items() if form_data.get(flag)]
        if rules and not pg_details.get("rules"):
            pg_details["rules"] = rules
        return pg_details

    def extract_basic_details_data(self, form_data: FormData) -> dict[str, Any]:
        room_details = super().extract_basic_details_data(form_data)

        room_features = [
            label for label, flags in PG_ROOM_FEATURE_FLAGS.items() if any(form_data.get(flag) for flag in flags)
        ]
        if room_features and not room_details.get("roomFeatures"):
            room_details["roomFeatures"] = room_features
        return room_details

