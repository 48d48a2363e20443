"""
Enum classes for listing flows.

These enums provide the canonical tags used across flow detection,
step sequencing and the persisted listing document.
"""

from enum import Enum

__all__ = [
    "Category",
    "FlowType",
    "ListingType",
    "PropertyStatus",
]


class Category(str, Enum):
    """Property category."""

    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    LAND = "land"


class ListingType(str, Enum):
    """How the property is offered."""

    RENT = "rent"
    SALE = "sale"
    FLATMATES = "flatmates"
    PGHOSTEL = "pghostel"
    COWORKING = "coworking"


class FlowType(str, Enum):
    """Combination of category and listing type that selects a wizard flow."""

    RESIDENTIAL_RENT = "residential_rent"
    RESIDENTIAL_SALE = "residential_sale"
    RESIDENTIAL_FLATMATES = "residential_flatmates"
    RESIDENTIAL_PGHOSTEL = "residential_pghostel"
    COMMERCIAL_RENT = "commercial_rent"
    COMMERCIAL_SALE = "commercial_sale"
    COMMERCIAL_COWORKING = "commercial_coworking"
    LAND_SALE = "land_sale"

    @property
    def category(self) -> Category:
        return Category(self.value.split("_", 1)[0])

    @property
    def listing_type(self) -> ListingType:
        return ListingType(self.value.split("_", 1)[1])


class PropertyStatus(str, Enum):
    """Moderation status of a listing."""

    DRAFT = "draft"
    PENDING = "pending"
    PUBLISHED = "published"
    REJECTED = "rejected"
