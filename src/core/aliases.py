"""
Alias mappings for listing categories and listing types.

Wizard URLs, ad-type parameters and older stored documents spell the same
flow in different ways. These tables map the tolerated variants to the
canonical enum values.
"""

from src.core.enums import Category, FlowType, ListingType

__all__ = [
    "CATEGORY_ALIASES",
    "FLOW_TYPE_ALIASES",
    "LISTING_TYPE_ALIASES",
    "normalize_category",
    "normalize_flow_type",
    "normalize_listing_type",
]

CATEGORY_ALIASES: dict[str, Category] = {
    "residential": Category.RESIDENTIAL,
    "res": Category.RESIDENTIAL,
    "commercial": Category.COMMERCIAL,
    "com": Category.COMMERCIAL,
    "land": Category.LAND,
    "plot": Category.LAND,
}

LISTING_TYPE_ALIASES: dict[str, ListingType] = {
    "rent": ListingType.RENT,
    "rental": ListingType.RENT,
    "sale": ListingType.SALE,
    "sell": ListingType.SALE,
    "flatmates": ListingType.FLATMATES,
    "flatmate": ListingType.FLATMATES,
    "flat-mates": ListingType.FLATMATES,
    "flat_mates": ListingType.FLATMATES,
    "pghostel": ListingType.PGHOSTEL,
    "pg-hostel": ListingType.PGHOSTEL,
    "pg_hostel": ListingType.PGHOSTEL,
    "pg": ListingType.PGHOSTEL,
    "hostel": ListingType.PGHOSTEL,
    "coworking": ListingType.COWORKING,
    "co-working": ListingType.COWORKING,
    "co_working": ListingType.COWORKING,
}

# Whole flow-type spellings that do not split cleanly into category + listing type
FLOW_TYPE_ALIASES: dict[str, FlowType] = {
    "coworking": FlowType.COMMERCIAL_COWORKING,
    "pghostel": FlowType.RESIDENTIAL_PGHOSTEL,
    "flatmates": FlowType.RESIDENTIAL_FLATMATES,
    "land": FlowType.LAND_SALE,
}


def _clean(value: str | None) -> str:
    return str(value).strip().lower() if value is not None else ""


def normalize_category(value: str | None) -> Category | None:
    return CATEGORY_ALIASES.get(_clean(value))


def normalize_listing_type(value: str | None) -> ListingType | None:
    return LISTING_TYPE_ALIASES.get(_clean(value))


def normalize_flow_type(value: str | FlowType | None) -> FlowType | None:
    """
    Resolve a flow type spelling such as 'residential_sell' or 'commercial_co-working'.

    Returns None if the value does not name a known flow.
    """
    text = _clean(value.value if isinstance(value, FlowType) else value)
    if not text:
        return None
    if text in FLOW_TYPE_ALIASES:
        return FLOW_TYPE_ALIASES[text]

    category_text, _, listing_text = text.partition("_")
    category = normalize_category(category_text)
    listing_type = normalize_listing_type(listing_text)
    if category is None or listing_type is None:
        return None
    try:
        return FlowType(f"{category.value}_{listing_type.value}")
    except ValueError:
        return None
