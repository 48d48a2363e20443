import copy
import re
from abc import ABC, abstractmethod
from typing import Any, Mapping

from src.core.aliases import normalize_category, normalize_flow_type, normalize_listing_type
from src.core.enums import Category, FlowType, ListingType, PropertyStatus
from src.core.fields import (
    LEGACY_SECTION_KEYS,
    NESTED_SECTION_KEYS,
    SECTION_FIELDS,
    SECTION_PATTERNS,
)
from src.core.models import FlowContext, FlowInfo, FormData, Media, Meta, NormalizedForm, utc_now_iso
from src.core.steps import get_data_steps, get_flow_steps, get_step_prefix
from src.logger_setup import get_logger

logger = get_logger(__name__)

PG_TOKEN_RE = re.compile(r"(?:^|[^a-z])pg(?:[^a-z]|$)")

EXTRACTORS: dict[str, str] = {
    "basic_details": "extract_basic_details_data",
    "location": "extract_location_data",
    "rental": "extract_rental_data",
    "sale_details": "extract_sale_data",
    "features": "extract_features_data",
    "flatmate_details": "extract_flatmate_data",
    "pg_details": "extract_pg_data",
    "coworking_details": "extract_coworking_data",
    "land_features": "extract_land_features_data",
}


def as_flow_context(context: FlowContext | Mapping[str, Any] | None) -> FlowContext:
    if isinstance(context, FlowContext):
        return context
    return FlowContext.model_validate(dict(context or {}))


def as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _merge_missing(target: dict, source: Mapping[str, Any], fields: tuple[str, ...] | None = None) -> None:
    """Copy values from source into target without overwriting (first write wins)."""
    keys = fields if fields is not None else tuple(source.keys())
    for key in keys:
        value = source.get(key)
        if value is None or key in target:
            continue
        target[key] = value


def contains_any(text: str, tokens: tuple[str, ...]) -> bool:
    return any(token in text for token in tokens)


def has_pg_token(text: str) -> bool:
    return "hostel" in text or "pghostel" in text or "pg-hostel" in text or bool(PG_TOKEN_RE.search(text))


class BaseFlowService(ABC):
    """
    Shared detection helpers and extraction engine for all listing flows.

    Subclasses set ``flow_type``, implement ``detect_flow`` and may extend
    ``field_overrides`` or override a section extractor.
    """

    flow_type: FlowType
    # section -> allowlist replacing the default one for this flow
    field_overrides: dict[str, tuple[str, ...]] = {}

    @property
    def category(self) -> Category:
        return self.flow_type.category

    @property
    def listing_type(self) -> ListingType:
        return self.flow_type.listing_type

    def get_flow_type(self) -> str:
        return self.flow_type.value

    def get_flow_key(self) -> str:
        return self.get_flow_type()

    def get_steps(self) -> list[str]:
        return get_flow_steps(self.flow_type)

    def get_step_key(self, section: str) -> str:
        return f"{get_step_prefix(self.flow_type)}_{section}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_flow_type()})"

    # -------------------------------------------------------------------------
    # Detection
    # -------------------------------------------------------------------------

    @abstractmethod
    def detect_flow(self, form_data: FormData, context: FlowContext | Mapping[str, Any] | None) -> bool:
        pass

    @staticmethod
    def flow_meta(form_data: FormData) -> dict:
        return as_dict(as_dict(form_data).get("flow"))

    @staticmethod
    def url_path(context: FlowContext) -> str:
        return (context.url_path or "").lower()

    @staticmethod
    def ad_type(context: FlowContext) -> str:
        return (context.ad_type or "").lower()

    def meta_category(self, form_data: FormData) -> Category | None:
        return normalize_category(self.flow_meta(form_data).get("category"))

    def meta_listing_type(self, form_data: FormData) -> str:
        return str(self.flow_meta(form_data).get("listingType") or "").lower()

    def matches_explicit_flow_type(self, form_data: FormData) -> bool:
        meta = self.flow_meta(form_data)
        explicit = meta.get("flowType") or meta.get("flow_type") or as_dict(form_data).get("flowType")
        return normalize_flow_type(explicit) == self.flow_type

    def matches_meta(self, form_data: FormData, category: Category, listing_type: ListingType) -> bool:
        return (
            self.meta_category(form_data) == category
            and normalize_listing_type(self.meta_listing_type(form_data)) == listing_type
        )

    def has_step_content(self, form_data: FormData, sections: tuple[str, ...] | None = None) -> bool:
        """
        True if one of this flow's prefixed step objects is non-empty.

        When ``sections`` is given, only those sections are checked and the
        bare section key (e.g. ``steps.pg_details``) counts too.
        """
        steps = as_dict(as_dict(form_data).get("steps"))
        if sections is None:
            keys = [step_key for _, step_key in get_data_steps(self.flow_type)]
        else:
            keys = [key for section in sections for key in (self.get_step_key(section), section)]
        return any(as_dict(steps.get(key)) for key in keys)

    # -------------------------------------------------------------------------
    # Formatting
    # -------------------------------------------------------------------------

    def format_data(self, form_data: FormData) -> NormalizedForm:
        """
        Build the canonical step-keyed document from raw wizard state.

        The input is not mutated; every call returns a new document.
        """
        data = copy.deepcopy(as_dict(form_data))
        steps = self.format_steps_section(data)
        normalized = NormalizedForm(
            meta=self.format_meta_section(data),
            flow=self.format_flow_section(),
            steps=steps,
            media=self.format_media_section(data),
        )
        logger.debug(f"[{self.get_flow_type()}] Formatted {len(steps)} steps: {list(steps)}")
        return normalized

    def format_meta_section(self, form_data: FormData) -> Meta:
        meta = as_dict(form_data.get("meta"))

        def _text(value: Any) -> str | None:
            return str(value) if value not in (None, "") else None

        return Meta(
            id=_text(meta.get("id")),
            owner_id=_text(meta.get("owner_id") or meta.get("owner")),
            status=_text(meta.get("status")) or PropertyStatus.DRAFT.value,
            created_at=_text(meta.get("created_at")) or utc_now_iso(),
            updated_at=utc_now_iso(),
        )

    def format_flow_section(self) -> FlowInfo:
        return FlowInfo(category=self.category, listing_type=self.listing_type, flow_type=self.flow_type)

    def format_media_section(self, form_data: FormData) -> Media:
        media = dict(as_dict(form_data.get("media")))
        # Older drafts stored bare lists
        if isinstance(media.get("photos"), list):
            media["photos"] = {"images": media["photos"]}
        if isinstance(media.get("videos"), list):
            media["videos"] = {"urls": media["videos"]}
        for key in ("photos", "videos"):
            if key in media and not isinstance(media[key], dict):
                del media[key]
        return Media.model_validate(media)

    def format_steps_section(self, form_data: FormData) -> dict[str, dict[str, Any]]:
        """
        Build the steps map for this flow. Review and photos never appear.
        """
        steps: dict[str, dict[str, Any]] = {}
        for section, step_key in get_data_steps(self.flow_type):
            extractor = getattr(self, EXTRACTORS[section])
            steps[step_key] = extractor(form_data)
        self.post_process_steps(steps, form_data)
        return steps

    def post_process_steps(self, steps: dict[str, dict[str, Any]], form_data: FormData) -> None:
        """Hook for defaults that depend on more than one step."""

    def get_section_fields(self, section: str) -> tuple[str, ...]:
        return self.field_overrides.get(section, SECTION_FIELDS[section])

    def get_owned_fields(self) -> dict[str, tuple[str, ...]]:
        """Allowlist per section, with each field owned by the first step listing it."""
        claimed: set[str] = set()
        owned = {}
        for section, _ in get_data_steps(self.flow_type):
            fields = tuple(field for field in self.get_section_fields(section) if field not in claimed)
            claimed.update(fields)
            owned[section] = fields
        return owned

    def get_section_sources(self, form_data: FormData, section: str) -> list[dict]:
        """
        Nested objects holding data for a section, most trusted first.

        Order: step map entry, misplaced step object at the root, section
        objects (including other flows' steps for the same section), then
        legacy objects under ``details``.
        """
        step_key = self.get_step_key(section)
        steps = as_dict(form_data.get("steps"))
        sources = [steps.get(step_key), form_data.get(step_key)]
        sources.extend(form_data.get(key) for key in NESTED_SECTION_KEYS[section])

        pattern = SECTION_PATTERNS[section]
        for container in (steps, form_data):
            sources.extend(value for key, value in container.items() if key != step_key and pattern.match(key))

        legacy = as_dict(form_data.get("details"))
        sources.extend(legacy.get(key) for key in LEGACY_SECTION_KEYS[section])
        return [source for source in sources if isinstance(source, dict)]

    def extract_section(self, form_data: FormData, section: str) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for source in self.get_section_sources(form_data, section):
            _merge_missing(result, source)
        owned = self.get_owned_fields().get(section, self.get_section_fields(section))
        _merge_missing(result, form_data, owned)
        return result

    def migrate_root_fields_to_steps(self, form_data: FormData) -> FormData:
        """
        Copy allowlisted flat root fields into this flow's steps.

        A field already present in the step is kept. Root values stay in place.
        """
        data = copy.deepcopy(as_dict(form_data))
        steps = as_dict(data.get("steps"))
        for section, fields in self.get_owned_fields().items():
            step_key = self.get_step_key(section)
            step = dict(as_dict(steps.get(step_key)))
            _merge_missing(step, data, fields)
            steps[step_key] = step
        data["steps"] = steps
        return data

    # -------------------------------------------------------------------------
    # Section extractors
    # -------------------------------------------------------------------------

    def extract_basic_details_data(self, form_data: FormData) -> dict[str, Any]:
        return self.extract_section(form_data, "basic_details")

    def extract_location_data(self, form_data: FormData) -> dict[str, Any]:
        location = self.extract_section(form_data, "location")

        coordinates = location.get("coordinates")
        if isinstance(coordinates, dict):
            latitude = coordinates.get("latitude", coordinates.get("lat"))
            longitude = coordinates.get("longitude", coordinates.get("lng"))
            if latitude is not None and longitude is not None:
                location["coordinates"] = {"latitude": latitude, "longitude": longitude}
        elif location.get("latitude") is not None and location.get("longitude") is not None:
            location["coordinates"] = {"latitude": location["latitude"], "longitude": location["longitude"]}
        return location

    def extract_rental_data(self, form_data: FormData) -> dict[str, Any]:
        return self.extract_section(form_data, "rental")

    def extract_sale_data(self, form_data: FormData) -> dict[str, Any]:
        sale = self.extract_section(form_data, "sale_details")
        sale.setdefault("expectedPrice", 0)
        sale.setdefault("priceNegotiable", False)
        return sale

    def extract_features_data(self, form_data: FormData) -> dict[str, Any]:
        return self.extract_section(form_data, "features")

    def extract_flatmate_data(self, form_data: FormData) -> dict[str, Any]:
        return self.extract_section(form_data, "flatmate_details")

    def extract_pg_data(self, form_data: FormData) -> dict[str, Any]:
        return self.extract_section(form_data, "pg_details")

    def extract_coworking_data(self, form_data: FormData) -> dict[str, Any]:
        return self.extract_section(form_data, "coworking_details")

    def extract_land_features_data(self, form_data: FormData) -> dict[str, Any]:
        return self.extract_section(form_data, "land_features")
