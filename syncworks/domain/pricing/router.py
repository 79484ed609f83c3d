"""Pricing router - Estimate calculation endpoints"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ...shared.numbers import format_price_jpy
from .schemas import CompareRequest, EstimateRequest
from .service import PricingService

router = APIRouter(prefix="/api/pricing", tags=["Pricing"])


def get_pricing_service(db: Session = Depends(get_db)) -> PricingService:
    """Dependency injection for PricingService"""
    return PricingService(db)


@router.post("/estimate")
async def calculate_estimate(
    data: EstimateRequest,
    service: PricingService = Depends(get_pricing_service),
):
    """Tax-inclusive estimate for a move"""
    result = service.estimate(data)
    return {
        "success": True,
        "data": {**result.model_dump(), "formattedTotal": format_price_jpy(result.total)},
    }


@router.post("/compare")
async def compare_estimates(
    data: CompareRequest,
    service: PricingService = Depends(get_pricing_service),
):
    comparison = service.compare(data.estimates)
    return {"success": True, "data": comparison.model_dump()}
