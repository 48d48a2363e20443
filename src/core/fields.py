"""
Field allowlists and lookup locations for each data section.

The wizard has written the same logical field to several places over
time: the step map, a section object at the root, a legacy object under
``details`` and the flat root. The tables here name those places so the
flow services can read them in a fixed order.
"""

import re

__all__ = [
    "BASIC_DETAILS_FIELDS",
    "COMMERCIAL_DETAILS_FIELDS",
    "COWORKING_FIELDS",
    "FEATURE_FIELDS",
    "FLATMATE_FIELDS",
    "LAND_DETAILS_FIELDS",
    "LAND_FEATURE_FIELDS",
    "LEGACY_SECTION_KEYS",
    "LOCATION_FIELDS",
    "NESTED_SECTION_KEYS",
    "PG_FIELDS",
    "PG_ROOM_FEATURE_FLAGS",
    "PG_RULE_FLAGS",
    "RENTAL_FIELDS",
    "ROOM_DETAILS_FIELDS",
    "SALE_FIELDS",
    "SECTION_FIELDS",
    "SECTION_PATTERNS",
]

# =============================================================================
# SECTION ALLOWLISTS
# =============================================================================

BASIC_DETAILS_FIELDS: tuple[str, ...] = (
    "title",
    "propertyType",
    "bhkType",
    "floor",
    "totalFloors",
    "builtUpArea",
    "builtUpAreaUnit",
    "bathrooms",
    "balconies",
    "facing",
    "propertyAge",
    "propertyCondition",
    "hasBalcony",
    "hasAC",
)

COMMERCIAL_DETAILS_FIELDS: tuple[str, ...] = (
    "cabins",
    "meetingRooms",
    "washrooms",
    "cornerProperty",
    "mainRoadFacing",
)

ROOM_DETAILS_FIELDS: tuple[str, ...] = (
    "title",
    "roomType",
    "bathroomType",
    "totalCapacity",
    "roomSize",
    "expectedRent",
    "expectedDeposit",
    "roomFeatures",
)

LAND_DETAILS_FIELDS: tuple[str, ...] = (
    "title",
    "landType",
    "plotLength",
    "plotWidth",
    "builtUpArea",
    "builtUpAreaUnit",
    "plotFacing",
    "soilType",
    "topography",
    "waterAvailability",
    "electricityStatus",
    "roadConnectivity",
    "developmentStatus",
)

LOCATION_FIELDS: tuple[str, ...] = (
    "address",
    "flatPlotNo",
    "landmark",
    "locality",
    "area",
    "city",
    "district",
    "state",
    "pinCode",
    "coordinates",
    "latitude",
    "longitude",
)

RENTAL_FIELDS: tuple[str, ...] = (
    "rentAmount",
    "securityDeposit",
    "maintenanceCharges",
    "rentNegotiable",
    "availableFrom",
    "preferredTenants",
    "leaseDuration",
    "furnishingStatus",
    "hasSimilarUnits",
    "propertyShowOption",
    "propertyShowPerson",
    "secondaryNumber",
    "secondaryContactNumber",
)

SALE_FIELDS: tuple[str, ...] = (
    "expectedPrice",
    "priceNegotiable",
    "possessionDate",
    "hasSimilarUnits",
    "propertyShowOption",
    "propertyShowPerson",
    "secondaryNumber",
    "secondaryContactNumber",
)

FEATURE_FIELDS: tuple[str, ...] = (
    "amenities",
    "parking",
    "petFriendly",
    "nonVegAllowed",
    "waterSupply",
    "powerBackup",
    "gatedSecurity",
    "description",
    "isSmokingAllowed",
    "isDrinkingAllowed",
    "hasAttachedBathroom",
    "hasGym",
)

FLATMATE_FIELDS: tuple[str, ...] = (
    "preferredGender",
    "occupancy",
    "foodPreference",
    "tenantType",
    "roomSharing",
    "maxFlatmates",
    "currentFlatmates",
    "about",
)

PG_FIELDS: tuple[str, ...] = (
    "genderPreference",
    "preferredGuests",
    "preferredTenantType",
    "foodIncluded",
    "mealOptions",
    "includedMeals",
    "pgRules",
    "rules",
    "gateClosingTime",
    "availableFrom",
    "pgType",
    "occupancyTypes",
    "facilities",
    "noticePolicy",
    "description",
)

COWORKING_FIELDS: tuple[str, ...] = (
    "spaceType",
    "capacity",
    "operatingHours",
    "amenities",
    "securityDeposit",
    "minimumCommitment",
    "discounts",
    "availableFrom",
)

LAND_FEATURE_FIELDS: tuple[str, ...] = (
    "approvals",
    "boundaryStatus",
    "cornerPlot",
    "landUseZone",
    "description",
)

SECTION_FIELDS: dict[str, tuple[str, ...]] = {
    "basic_details": BASIC_DETAILS_FIELDS,
    "location": LOCATION_FIELDS,
    "rental": RENTAL_FIELDS,
    "sale_details": SALE_FIELDS,
    "features": FEATURE_FIELDS,
    "flatmate_details": FLATMATE_FIELDS,
    "pg_details": PG_FIELDS,
    "coworking_details": COWORKING_FIELDS,
    "land_features": LAND_FEATURE_FIELDS,
}

# =============================================================================
# PG/HOSTEL CHECKBOXES
# =============================================================================

PG_RULE_FLAGS: dict[str, str] = {
    "noSmoking": "No Smoking",
    "noDrinking": "No Drinking",
    "noGuardians": "No Guardians Stay",
    "noGirlsEntry": "No Girl's Entry",
    "noNonVeg": "No Non-veg",
}

PG_ROOM_FEATURE_FLAGS: dict[str, tuple[str, ...]] = {
    "Air Conditioner": ("airConditioner", "hasAC"),
    "Fan": ("fan",),
    "Wi-Fi": ("wiFi",),
    "TV": ("tv",),
    "Furniture": ("furniture",),
    "Geyser": ("geyser",),
}

# =============================================================================
# LOOKUP LOCATIONS
# =============================================================================

# Section objects written at the root by the flow-specific form sections
NESTED_SECTION_KEYS: dict[str, tuple[str, ...]] = {
    "basic_details": ("basic_details", "commercial_details"),
    "location": ("location",),
    "rental": ("rental",),
    "sale_details": ("sale", "sale_details"),
    "features": ("features",),
    "flatmate_details": ("flatmate_details",),
    "pg_details": ("pg_details",),
    "coworking_details": ("coworking", "coworking_details"),
    "land_features": ("land_features",),
}

# Objects under the legacy ``details`` container
LEGACY_SECTION_KEYS: dict[str, tuple[str, ...]] = {
    "basic_details": ("basicDetails",),
    "location": ("location",),
    "rental": ("rentalInfo",),
    "sale_details": ("saleInfo",),
    "features": ("features",),
    "flatmate_details": ("flatmateDetails",),
    "pg_details": ("pgDetails",),
    "coworking_details": ("coworkingDetails",),
    "land_features": ("landFeatures",),
}

# Step objects of any flow, e.g. 'res_rent_rental' or a bare 'rental'
SECTION_PATTERNS: dict[str, re.Pattern] = {
    section: re.compile(rf"^(?:[a-z]+_[a-z]+_)?{section}$") for section in SECTION_FIELDS
}
