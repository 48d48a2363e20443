"""
Flow detection for stored listings.

Stored rows come from several wizard versions, so the flow type may sit
in the document's ``flow`` block, at the document root, on the row itself,
or only be implied by the step keys. ``detect_flow_type`` tries those in
order and falls back to residential rent.
"""

import json
from typing import Any, Mapping

from src.core.aliases import normalize_flow_type
from src.core.enums import Category, FlowType, ListingType
from src.core.steps import flow_type_from_step_key
from src.logger_setup import get_logger

logger = get_logger(__name__)

__all__ = [
    "FLOW_DISPLAY_NAMES",
    "detect_flow_type",
    "get_flow_category",
    "get_flow_type_display_name",
    "get_listing_type",
    "is_sale_property",
    "load_property_details",
]

FLOW_DISPLAY_NAMES: dict[str, str] = {
    FlowType.RESIDENTIAL_RENT.value: "Residential Rent",
    FlowType.RESIDENTIAL_SALE.value: "Residential Sale",
    FlowType.RESIDENTIAL_FLATMATES.value: "Flatmates",
    FlowType.RESIDENTIAL_PGHOSTEL.value: "PG/Hostel",
    FlowType.COMMERCIAL_RENT.value: "Commercial Rent",
    FlowType.COMMERCIAL_SALE.value: "Commercial Sale",
    FlowType.COMMERCIAL_COWORKING.value: "Coworking Space",
    FlowType.LAND_SALE.value: "Land/Plot Sale",
}

# Characteristic markers checked when nothing names the flow, most specific first
CHARACTERISTIC_MARKERS: list[tuple[FlowType, str, str]] = [
    (FlowType.RESIDENTIAL_PGHOSTEL, "pgDetails", "pg_details"),
    (FlowType.RESIDENTIAL_FLATMATES, "flatmateDetails", "flatmate"),
    (FlowType.COMMERCIAL_COWORKING, "coworkingDetails", "coworking"),
    (FlowType.LAND_SALE, "landDetails", "land"),
]


def load_property_details(value: Any) -> dict[str, Any]:
    """Return the listing document from a row value that may be a JSON string."""
    if isinstance(value, dict):
        return value
    if isinstance(value, str) and value.strip():
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError as e:
            logger.warning(f"Could not parse property_details JSON: {e}")
            return {}
        return parsed if isinstance(parsed, dict) else {}
    return {}


def _from_steps(steps: Any) -> FlowType | None:
    if not isinstance(steps, dict) or not steps:
        return None
    return flow_type_from_step_key(next(iter(steps)))


def _from_characteristics(details: dict[str, Any]) -> FlowType:
    step_keys = list(details["steps"]) if isinstance(details.get("steps"), dict) else []
    for flow_type, legacy_key, step_marker in CHARACTERISTIC_MARKERS:
        if details.get(legacy_key) or any(step_marker in key for key in step_keys):
            return flow_type

    basic_details = details.get("basicDetails")
    if isinstance(basic_details, dict) and str(basic_details.get("propertyType", "")).lower() == "land":
        return FlowType.LAND_SALE
    return FlowType.RESIDENTIAL_RENT


def detect_flow_type(property_row: Mapping[str, Any]) -> FlowType:
    details = load_property_details(property_row.get("property_details"))
    flow_block = details.get("flow") if isinstance(details.get("flow"), dict) else {}

    candidates = (
        flow_block.get("flowType"),
        details.get("flowType"),
        property_row.get("flow_type"),
        property_row.get("flowType"),
    )
    for candidate in candidates:
        flow_type = normalize_flow_type(candidate) if isinstance(candidate, (str, FlowType)) else None
        if flow_type:
            break
    else:
        flow_type = _from_steps(details.get("steps")) or _from_characteristics(details)

    logger.debug(f"Detected stored flow type {flow_type.value} for property {property_row.get('id')}")
    return flow_type


def get_flow_type_display_name(flow_type: FlowType | str) -> str:
    key = flow_type.value if isinstance(flow_type, FlowType) else str(flow_type)
    if key in FLOW_DISPLAY_NAMES:
        return FLOW_DISPLAY_NAMES[key]
    return key.replace("_", " ").title()


def is_sale_property(flow_type: FlowType | str) -> bool:
    key = flow_type.value if isinstance(flow_type, FlowType) else str(flow_type)
    return "sale" in key


def get_flow_category(flow_type: FlowType | str) -> str:
    key = flow_type.value if isinstance(flow_type, FlowType) else str(flow_type)
    return key.split("_", 1)[0] or Category.RESIDENTIAL.value


def get_listing_type(flow_type: FlowType | str) -> str:
    return ListingType.SALE.value if is_sale_property(flow_type) else ListingType.RENT.value
