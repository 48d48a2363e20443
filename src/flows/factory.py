from typing import Any, Mapping

from src.core.aliases import normalize_category, normalize_flow_type, normalize_listing_type
from src.core.enums import FlowType
from src.core.errors import FlowDetectionError, UnknownFlowTypeError
from src.core.models import FlowContext, FormData
from src.flows.base import BaseFlowService, as_dict, as_flow_context
from src.flows.commercial_rent import CommercialRentFlowService
from src.flows.commercial_sale import CommercialSaleFlowService
from src.flows.coworking import CoworkingFlowService
from src.flows.flatmates import ResidentialFlatmatesFlowService
from src.flows.land_sale import LandSaleFlowService
from src.flows.pghostel import PGHostelFlowService
from src.flows.residential_rent import ResidentialRentFlowService
from src.flows.residential_sale import ResidentialSaleFlowService
from src.logger_setup import get_logger

logger = get_logger(__name__)


class FlowServiceFactory:
    """
    Picks the flow service for a wizard session.

    Detectors overlap on ambiguous input (a commercial rent URL also looks
    like a generic rent), so they run in a fixed priority order: the
    specialised flows first, then flatmates, commercial, and finally the
    generic residential flows.
    """

    _pg_hostel = PGHostelFlowService()

    _services: list[BaseFlowService] = [
        _pg_hostel,
        CoworkingFlowService(),
        LandSaleFlowService(),
        ResidentialFlatmatesFlowService(),
        CommercialSaleFlowService(),
        CommercialRentFlowService(),
        ResidentialSaleFlowService(),
        ResidentialRentFlowService(),
    ]

    _by_type: dict[FlowType, BaseFlowService] = {service.flow_type: service for service in _services}

    @classmethod
    def get_all_services(cls) -> list[BaseFlowService]:
        return list(cls._services)

    @classmethod
    def get_flow_types(cls) -> list[str]:
        return [service.get_flow_type() for service in cls._services]

    @classmethod
    def get_flow_service(
        cls,
        form_data: FormData | None,
        context: FlowContext | Mapping[str, Any] | None = None,
    ) -> BaseFlowService:
        """
        Return the first service whose detector matches.

        Raises:
            FlowDetectionError: If no detector matches.
        """
        form_data = as_dict(form_data)
        context = as_flow_context(context)

        # PG/Hostel is the least reliable to detect from structure alone
        pg_hostel = cls._pg_hostel
        if (
            pg_hostel.matches_url(context)
            or pg_hostel.matches_mode_flag(context)
            or pg_hostel.matches_listing_type(form_data)
        ):
            logger.info(f"Detected flow type: {pg_hostel.get_flow_type()} (PG/Hostel override)")
            return pg_hostel

        for service in cls._services:
            if service.detect_flow(form_data, context):
                logger.info(f"Detected flow type: {service.get_flow_type()}")
                return service

        flow_meta = as_dict(form_data.get("flow"))
        logger.warning(
            f"No flow detected for url_path={context.url_path!r}, ad_type={context.ad_type!r}, flow={flow_meta!r}"
        )
        raise FlowDetectionError(context.url_path, context.ad_type, flow_meta)

    @classmethod
    def get_flow_service_by_type(cls, flow_type: FlowType | str) -> BaseFlowService:
        """
        Look up a service by flow type; tolerated spellings like 'residential_sell' resolve too.

        Raises:
            UnknownFlowTypeError: If the type is not registered.
        """
        resolved = normalize_flow_type(flow_type)
        service = cls._by_type.get(resolved) if resolved else None
        if not service:
            raise UnknownFlowTypeError(str(getattr(flow_type, "value", flow_type)), cls.get_flow_types())
        return service

    @classmethod
    def get_service(cls, category: str, listing_type: str) -> BaseFlowService:
        """
        Look up a service by category and listing type, e.g. ('residential', 'pg').

        Raises:
            UnknownFlowTypeError: If the pair does not name a registered flow.
        """
        resolved_category = normalize_category(category)
        resolved_listing_type = normalize_listing_type(listing_type)
        if resolved_category is None or resolved_listing_type is None:
            raise UnknownFlowTypeError(f"{category}_{listing_type}", cls.get_flow_types())
        return cls.get_flow_service_by_type(f"{resolved_category.value}_{resolved_listing_type.value}")
