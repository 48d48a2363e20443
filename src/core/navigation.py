"""
Step navigation for the owner listing wizard.

The active flow is re-detected from the current form values and URL on
every call; nothing about the flow is cached, so editing a field that
changes the category can change the step sequence mid-session.
"""

from typing import Any, Callable

from src.core.enums import FlowType
from src.core.errors import FlowDetectionError
from src.core.models import FlowContext, FormData, StepDefinition
from src.core.steps import REVIEW_STEP_ID, STEP_DEFINITIONS, STEPS, get_flow_steps, get_step_key
from src.core.urls import build_step_url, get_property_info_from_url
from src.flows.base import BaseFlowService
from src.flows.factory import FlowServiceFactory
from src.logger_setup import get_logger

logger = get_logger(__name__)

FLOW_MODE_FLAGS: dict[FlowType, str] = {
    FlowType.RESIDENTIAL_RENT: "is_rent_mode",
    FlowType.COMMERCIAL_RENT: "is_rent_mode",
    FlowType.RESIDENTIAL_SALE: "is_sale_mode",
    FlowType.COMMERCIAL_SALE: "is_sale_mode",
    FlowType.RESIDENTIAL_PGHOSTEL: "is_pg_hostel_mode",
    FlowType.RESIDENTIAL_FLATMATES: "is_flatmates_mode",
    FlowType.COMMERCIAL_COWORKING: "is_coworking_mode",
    FlowType.LAND_SALE: "is_land_sale_mode",
}

_RENT = "is_rent_mode"
_SALE = "is_sale_mode"
_PG = "is_pg_hostel_mode"
_FLATMATES = "is_flatmates_mode"
_COWORKING = "is_coworking_mode"
_LAND = "is_land_sale_mode"

# step id -> mode flags under which the step is hidden
STEP_HIDDEN_WHEN: dict[str, frozenset[str]] = {
    "details": frozenset({_PG, _LAND}),
    "room_details": frozenset({_RENT, _SALE, _FLATMATES, _COWORKING, _LAND}),
    "land_details": frozenset({_RENT, _SALE, _PG, _FLATMATES, _COWORKING}),
    "location": frozenset(),
    "rental": frozenset({_SALE, _PG, _COWORKING, _LAND, _FLATMATES}),
    "sale": frozenset({_RENT, _PG, _FLATMATES, _COWORKING}),
    "flatmate_details": frozenset({_RENT, _SALE, _PG, _COWORKING, _LAND}),
    "pg_details": frozenset({_RENT, _SALE, _FLATMATES, _COWORKING, _LAND}),
    "coworking_details": frozenset({_RENT, _SALE, _PG, _FLATMATES, _LAND}),
    "land_features": frozenset({_RENT, _SALE, _PG, _FLATMATES, _COWORKING}),
    "features": frozenset({_LAND}),
    "review": frozenset(),
    "photos": frozenset(),
}


class StepNavigator:
    """
    Tracks the current wizard step for one listing session.

    ``form_step`` is 1-based over the visible steps. Transitions write the
    new URL through ``url_updater`` before committing the step, and never
    raise: on any error they fall back to ``form_step +/- 1``.
    """

    def __init__(
        self,
        form_values: FormData | None = None,
        url_path: str = "",
        form_step: int = 1,
        mode: str = "create",
        property_id: str | None = None,
        is_sale_mode: bool | None = None,
        is_pg_hostel_mode: bool | None = None,
        ad_type: str | None = None,
        url_updater: Callable[[str], Any] | None = None,
        state_saver: Callable[[FormData], Any] | None = None,
    ):
        self.form_values = form_values or {}
        self.url_path = url_path
        self.form_step = form_step
        self.mode = mode
        self.property_id = property_id
        self.forced_sale_mode = is_sale_mode
        self.forced_pg_hostel_mode = is_pg_hostel_mode
        self.ad_type = ad_type
        self.url_updater = url_updater
        self.state_saver = state_saver
        self.current_url: str | None = url_path or None

    @classmethod
    def from_url(cls, url: str, form_values: FormData | None = None, **kwargs) -> "StepNavigator":
        """Start a session at the step named in the URL, or at the first step."""
        info = get_property_info_from_url(url)
        navigator = cls(
            form_values=form_values,
            url_path=url,
            mode=info.mode,
            property_id=info.property_id,
            **kwargs,
        )
        navigator.form_step = navigator.step_number(info.step_id) or 1
        return navigator

    # -------------------------------------------------------------------------
    # Flow and mode detection
    # -------------------------------------------------------------------------

    @property
    def context(self) -> FlowContext:
        return FlowContext(
            url_path=self.url_path,
            is_sale_mode=self.forced_sale_mode,
            is_pg_hostel_mode=self.forced_pg_hostel_mode,
            ad_type=self.ad_type,
        )

    @property
    def active_service(self) -> BaseFlowService:
        try:
            return FlowServiceFactory.get_flow_service(self.form_values, self.context)
        except FlowDetectionError:
            logger.debug("No flow detected for navigation, using residential rent steps")
            return FlowServiceFactory.get_flow_service_by_type(FlowType.RESIDENTIAL_RENT)

    @property
    def active_flow_type(self) -> FlowType:
        return self.active_service.flow_type

    def mode_flags(self, service: BaseFlowService | None = None) -> dict[str, bool]:
        active_flag = FLOW_MODE_FLAGS[(service or self.active_service).flow_type]
        return {flag: flag == active_flag for flag in set(FLOW_MODE_FLAGS.values())}

    @property
    def is_pg_hostel_mode(self) -> bool:
        return self.active_flow_type == FlowType.RESIDENTIAL_PGHOSTEL

    @property
    def is_flatmates_mode(self) -> bool:
        return self.active_flow_type == FlowType.RESIDENTIAL_FLATMATES

    @property
    def is_coworking_mode(self) -> bool:
        return self.active_flow_type == FlowType.COMMERCIAL_COWORKING

    @property
    def is_land_sale_mode(self) -> bool:
        return self.active_flow_type == FlowType.LAND_SALE

    @property
    def is_commercial_rent_mode(self) -> bool:
        return self.active_flow_type == FlowType.COMMERCIAL_RENT

    @property
    def is_commercial_sale_mode(self) -> bool:
        return self.active_flow_type == FlowType.COMMERCIAL_SALE

    @property
    def is_sale_mode(self) -> bool:
        return self.mode_flags()[_SALE]

    @property
    def is_rent_mode(self) -> bool:
        return self.mode_flags()[_RENT]

    # -------------------------------------------------------------------------
    # Step lists
    # -------------------------------------------------------------------------

    def is_step_hidden(self, step_id: str, flags: dict[str, bool] | None = None) -> bool:
        flags = flags if flags is not None else self.mode_flags()
        return any(flags.get(flag) for flag in STEP_HIDDEN_WHEN.get(step_id, frozenset()))

    def get_all_steps(self) -> list[dict[str, Any]]:
        """Every step definition with a ``hidden`` flag for the active flow."""
        flags = self.mode_flags()
        return [{**step.model_dump(), "hidden": self.is_step_hidden(step.id, flags)} for step in STEPS]

    def get_visible_steps(self, service: BaseFlowService | None = None) -> list[StepDefinition]:
        """The active flow's sequence without hidden steps. Review stays, before photos."""
        service = service or self.active_service
        flags = self.mode_flags(service)
        return [
            STEP_DEFINITIONS[step_id]
            for step_id in get_flow_steps(service.flow_type)
            if not self.is_step_hidden(step_id, flags)
        ]

    def get_navigation_sequence(self, service: BaseFlowService | None = None) -> list[str]:
        return [step.id for step in self.get_visible_steps(service) if step.id != REVIEW_STEP_ID]

    def step_number(self, step_id: str | None) -> int | None:
        """1-based position of a step among the visible steps."""
        for number, step in enumerate(self.get_visible_steps(), start=1):
            if step.id == step_id:
                return number
        return None

    @property
    def current_step_id(self) -> str | None:
        return self._step_id_at(self.form_step, self.get_visible_steps())

    @staticmethod
    def _step_id_at(step: int, visible: list[StepDefinition]) -> str | None:
        if 1 <= step <= len(visible):
            return visible[step - 1].id
        return None

    def get_current_step_key(self) -> str | None:
        """Persisted data key for the current step, e.g. 'res_rent_rental'."""
        step_id = self.current_step_id
        return get_step_key(self.active_flow_type, step_id) if step_id else None

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def handle_next_step(self) -> int:
        return self._move(1)

    def handle_previous_step(self) -> int:
        return self._move(-1)

    def _move(self, delta: int) -> int:
        try:
            service = self.active_service
            visible_steps = self.get_visible_steps(service)
            visible = [step.id for step in visible_steps]
            sequence = [step_id for step_id in visible if step_id != REVIEW_STEP_ID]
            current = self._step_id_at(self.form_step, visible_steps)

            if current in sequence:
                position = max(0, min(sequence.index(current) + delta, len(sequence) - 1))
                target_id = sequence[position]
                target_step = visible.index(target_id) + 1
            else:
                target_step = max(1, min(self.form_step + delta, len(visible)))
                target_id = visible[target_step - 1]

            self.save_form_state(service)
            self.update_url_for_step(target_id, service)
            logger.info(f"Navigating from step {self.form_step} ({current}) to {target_step} ({target_id})")
            self.form_step = target_step
        except Exception as e:
            logger.error(f"Error navigating from step {self.form_step}: {e}", exc_info=True)
            self.form_step = max(1, self.form_step + delta)
        return self.form_step

    def update_url_for_step(self, step_id: str, service: BaseFlowService | None = None) -> str | None:
        """Write the URL for a step; review has no URL of its own."""
        if step_id == REVIEW_STEP_ID:
            logger.debug("Review step keeps the current URL")
            return None

        if self.mode == "edit" and self.property_id:
            url = build_step_url(step_id, property_id=self.property_id)
        else:
            flow_type = (service or self.active_service).flow_type
            url = build_step_url(step_id, flow_type.category.value, flow_type.listing_type.value)

        if self.url_updater:
            self.url_updater(url)
        self.current_url = url
        if self.mode != "edit":
            self.url_path = url
        return url

    def save_form_state(self, service: BaseFlowService | None = None) -> FormData:
        """Move flat root fields into the active flow's steps and hand them to ``state_saver``."""
        state = (service or self.active_service).migrate_root_fields_to_steps(self.form_values)
        if self.state_saver:
            self.state_saver(state)
        return state
