"""
Listing flow services.

One service per flow type; ``FlowServiceFactory`` picks between them.
"""

from src.flows.base import BaseFlowService
from src.flows.commercial_rent import CommercialRentFlowService
from src.flows.commercial_sale import CommercialSaleFlowService
from src.flows.coworking import CoworkingFlowService
from src.flows.factory import FlowServiceFactory
from src.flows.flatmates import ResidentialFlatmatesFlowService
from src.flows.land_sale import LandSaleFlowService
from src.flows.pghostel import PGHostelFlowService
from src.flows.residential_rent import ResidentialRentFlowService
from src.flows.residential_sale import ResidentialSaleFlowService

__all__ = [
    "BaseFlowService",
    "CommercialRentFlowService",
    "CommercialSaleFlowService",
    "CoworkingFlowService",
    "FlowServiceFactory",
    "LandSaleFlowService",
    "PGHostelFlowService",
    "ResidentialFlatmatesFlowService",
    "ResidentialRentFlowService",
    "ResidentialSaleFlowService",
]
