"""
Wizard URL helpers.

Creation flows encode ``{base}/{category}/{listingType}/{stepId}`` in the
path; edit flows use ``/properties/{propertyId}/edit?step={stepId}``.
"""

import re
from urllib.parse import parse_qs, urlparse

from src.config import app_config
from src.core.models import PropertyUrlInfo
from src.core.steps import STEP_DEFINITIONS

__all__ = [
    "build_step_url",
    "get_property_info_from_url",
]

EDIT_PATH_RE = re.compile(r"/properties/(?P<property_id>[^/]+)/edit/?$")


def build_step_url(
    step_id: str,
    category: str | None = None,
    listing_type: str | None = None,
    property_id: str | None = None,
    base_path: str | None = None,
) -> str:
    """
    Build the wizard URL for a step.

    Raises:
        ValueError: If the step id is unknown, or a create URL lacks category/listing type.
    """
    if step_id not in STEP_DEFINITIONS:
        raise ValueError(f"Unknown step: {step_id}")

    if property_id:
        return f"/properties/{property_id}/edit?step={step_id}"

    if not category or not listing_type:
        raise ValueError("Cannot build step URL: missing category or listing type")

    base = (base_path or app_config.listing_base_path).rstrip("/")
    return f"{base}/{category.lower()}/{listing_type.lower()}/{step_id}"


def get_property_info_from_url(url: str, base_path: str | None = None) -> PropertyUrlInfo:
    """
    Read category, listing type, step and property id back out of a wizard URL.

    Unrecognised URLs yield an info object with only ``mode`` set.
    """
    parsed = urlparse(url or "")
    path = parsed.path

    edit_match = EDIT_PATH_RE.search(path)
    if edit_match:
        step = parse_qs(parsed.query).get("step", [None])[0]
        return PropertyUrlInfo(mode="edit", property_id=edit_match.group("property_id"), step_id=step)

    base = (base_path or app_config.listing_base_path).rstrip("/")
    if path != base and not path.startswith(base + "/"):
        return PropertyUrlInfo()

    parts = [part for part in path[len(base) :].split("/") if part]
    return PropertyUrlInfo(
        mode="create",
        category=parts[0].lower() if len(parts) > 0 else None,
        listing_type=parts[1].lower() if len(parts) > 1 else None,
        step_id=parts[2] if len(parts) > 2 else None,
    )
