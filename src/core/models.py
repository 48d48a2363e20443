"""
Data models for the listing wizard.

This module defines the classification context, the canonical
step-keyed listing document and the static step metadata.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from src.core.enums import Category, FlowType, ListingType, PropertyStatus

# Raw wizard state: field name -> value, possibly nested and duplicated
FormData = dict[str, Any]


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class FlowContext(BaseModel):
    """
    Signals available to flow detectors besides the form data itself.

    Accepts both snake_case and the camelCase names used by the wizard.
    Unknown signals are kept as extra attributes.
    """

    url_path: str = Field(default="", alias="urlPath")
    is_sale_mode: bool | None = Field(default=None, alias="isSaleMode")
    is_pg_hostel_mode: bool | None = Field(default=None, alias="isPGHostelMode")
    ad_type: str | None = Field(default=None, alias="adType")

    class Config:
        populate_by_name = True
        extra = "allow"
        frozen = True


class Meta(BaseModel):
    id: str | None = Field(default=None)
    owner_id: str | None = Field(default=None)
    status: PropertyStatus | str = Field(default=PropertyStatus.DRAFT)
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)
    version: str = Field(default="v3", alias="_version")

    class Config:
        populate_by_name = True
        use_enum_values = True


class FlowInfo(BaseModel):
    category: Category
    listing_type: ListingType = Field(alias="listingType")
    flow_type: FlowType = Field(alias="flowType")

    class Config:
        populate_by_name = True
        use_enum_values = True


class Media(BaseModel):
    photos: dict[str, Any] = Field(default_factory=lambda: {"images": []})
    videos: dict[str, Any] = Field(default_factory=lambda: {"urls": []})

    class Config:
        extra = "allow"


class NormalizedForm(BaseModel):
    """
    Canonical listing document produced by a flow service.

    Only the steps of the detected flow are present in ``steps``, keyed by
    ``{category_abbrev}_{listingType_abbrev}_{section}``.
    """

    meta: Meta
    flow: FlowInfo
    steps: dict[str, dict[str, Any]] = Field(default_factory=dict)
    media: Media = Field(default_factory=Media)

    def to_document(self) -> dict[str, Any]:
        """Serialize with the persisted (camelCase) key names."""
        return self.model_dump(by_alias=True, mode="json")


class StepDefinition(BaseModel):
    id: str
    title: str
    icon: str
    description: str

    class Config:
        frozen = True


class PropertyUrlInfo(BaseModel):
    mode: str = Field(default="create")
    category: str | None = Field(default=None)
    listing_type: str | None = Field(default=None)
    step_id: str | None = Field(default=None)
    property_id: str | None = Field(default=None)
