"""
Static wizard step tables.

Every flow has a fixed ordered sequence of wizard steps. Steps that carry
form data map to a data section, and the persisted step key is the flow
prefix joined with that section (e.g. ``res_pg_pg_details``).
"""

from src.core.enums import FlowType
from src.core.models import StepDefinition

__all__ = [
    "DATA_SECTIONS",
    "FLOW_STEP_PREFIXES",
    "FLOW_STEP_SEQUENCES",
    "PHOTOS_STEP_ID",
    "REVIEW_STEP_ID",
    "STEPS",
    "STEP_DEFINITIONS",
    "STEP_SECTIONS",
    "flow_type_from_step_key",
    "get_data_steps",
    "get_flow_steps",
    "get_step_definition",
    "get_step_key",
    "get_step_prefix",
]

REVIEW_STEP_ID = "review"
PHOTOS_STEP_ID = "photos"

STEPS: list[StepDefinition] = [
    StepDefinition(id="details", title="Basic Details", icon="Home", description="Property type and details"),
    StepDefinition(id="room_details", title="Room Details", icon="Bed", description="PG/Hostel room details"),
    StepDefinition(id="land_details", title="Land Details", icon="Map", description="Land type and plot size"),
    StepDefinition(id="location", title="Location", icon="MapPin", description="Property location"),
    StepDefinition(id="rental", title="Rental", icon="IndianRupee", description="Rental terms"),
    StepDefinition(id="sale", title="Sale Details", icon="IndianRupee", description="Sale details"),
    StepDefinition(
        id="flatmate_details", title="Flatmate Details", icon="Users", description="Flatmate preferences"
    ),
    StepDefinition(id="pg_details", title="PG Details", icon="Building", description="PG/Hostel facility details"),
    StepDefinition(
        id="coworking_details", title="Coworking Details", icon="Briefcase", description="Coworking space details"
    ),
    StepDefinition(
        id="land_features", title="Land Features", icon="Trees", description="Approvals, boundary and zoning"
    ),
    StepDefinition(id="features", title="Features", icon="Settings", description="Amenities and features"),
    StepDefinition(id=REVIEW_STEP_ID, title="Review", icon="ClipboardCheck", description="Review and publish"),
    StepDefinition(id=PHOTOS_STEP_ID, title="Photos", icon="ImagePlus", description="Property photos"),
]

STEP_DEFINITIONS: dict[str, StepDefinition] = {step.id: step for step in STEPS}

# Wizard step id -> data section stored under steps.{prefix}_{section}
STEP_SECTIONS: dict[str, str] = {
    "details": "basic_details",
    "room_details": "basic_details",
    "land_details": "basic_details",
    "location": "location",
    "rental": "rental",
    "sale": "sale_details",
    "flatmate_details": "flatmate_details",
    "pg_details": "pg_details",
    "coworking_details": "coworking_details",
    "land_features": "land_features",
    "features": "features",
}

DATA_SECTIONS = sorted(set(STEP_SECTIONS.values()))

FLOW_STEP_PREFIXES: dict[FlowType, str] = {
    FlowType.RESIDENTIAL_RENT: "res_rent",
    FlowType.RESIDENTIAL_SALE: "res_sale",
    FlowType.RESIDENTIAL_FLATMATES: "res_flat",
    FlowType.RESIDENTIAL_PGHOSTEL: "res_pg",
    FlowType.COMMERCIAL_RENT: "com_rent",
    FlowType.COMMERCIAL_SALE: "com_sale",
    FlowType.COMMERCIAL_COWORKING: "com_cow",
    FlowType.LAND_SALE: "land_sale",
}

FLOW_STEP_SEQUENCES: dict[FlowType, list[str]] = {
    FlowType.RESIDENTIAL_RENT: ["details", "location", "rental", "features", REVIEW_STEP_ID, PHOTOS_STEP_ID],
    FlowType.RESIDENTIAL_SALE: ["details", "location", "sale", "features", REVIEW_STEP_ID, PHOTOS_STEP_ID],
    FlowType.RESIDENTIAL_FLATMATES: [
        "details",
        "location",
        "flatmate_details",
        "features",
        REVIEW_STEP_ID,
        PHOTOS_STEP_ID,
    ],
    FlowType.RESIDENTIAL_PGHOSTEL: [
        "room_details",
        "location",
        "pg_details",
        "features",
        REVIEW_STEP_ID,
        PHOTOS_STEP_ID,
    ],
    FlowType.COMMERCIAL_RENT: ["details", "location", "rental", "features", REVIEW_STEP_ID, PHOTOS_STEP_ID],
    FlowType.COMMERCIAL_SALE: ["details", "location", "sale", "features", REVIEW_STEP_ID, PHOTOS_STEP_ID],
    FlowType.COMMERCIAL_COWORKING: [
        "details",
        "location",
        "coworking_details",
        "features",
        REVIEW_STEP_ID,
        PHOTOS_STEP_ID,
    ],
    FlowType.LAND_SALE: ["land_details", "location", "sale", "land_features", REVIEW_STEP_ID, PHOTOS_STEP_ID],
}


def get_step_definition(step_id: str) -> StepDefinition:
    definition = STEP_DEFINITIONS.get(step_id)
    if not definition:
        raise ValueError(f"Unknown step: {step_id}")
    return definition


def get_flow_steps(flow_type: FlowType | str) -> list[str]:
    return list(FLOW_STEP_SEQUENCES[FlowType(flow_type)])


def get_step_prefix(flow_type: FlowType | str) -> str:
    return FLOW_STEP_PREFIXES[FlowType(flow_type)]


def get_step_key(flow_type: FlowType | str, step_id: str) -> str | None:
    """Persisted key for a wizard step, or None for review/photos."""
    section = STEP_SECTIONS.get(step_id)
    if section is None:
        return None
    return f"{get_step_prefix(flow_type)}_{section}"


def get_data_steps(flow_type: FlowType | str) -> list[tuple[str, str]]:
    """(section, step_key) pairs for the flow, in wizard order."""
    pairs = []
    for step_id in get_flow_steps(flow_type):
        step_key = get_step_key(flow_type, step_id)
        if step_key:
            pairs.append((STEP_SECTIONS[step_id], step_key))
    return pairs


def flow_type_from_step_key(step_key: str) -> FlowType | None:
    """Infer the flow from a persisted step key prefix like 'com_cow_'."""
    for flow_type, prefix in FLOW_STEP_PREFIXES.items():
        if step_key.startswith(f"{prefix}_"):
            return flow_type
    return None
