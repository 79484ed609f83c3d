"""Pricing service - Builds estimates from the live truck type and season catalogues"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ..season_rules.service import SeasonRuleService
from ..truck_types.service import TruckTypeService
from .calculator import calculate_estimate, compare_estimates
from .schemas import EstimateComparison, EstimateRequest, EstimateResult

logger = logging.getLogger(__name__)


class PricingService:
    """Service layer for estimate calculation"""

    def __init__(self, db: Session):
        self.db = db
        self.truck_types = TruckTypeService(db)
        self.season_rules = SeasonRuleService(db)

    def estimate(self, data: EstimateRequest) -> EstimateResult:
        result = calculate_estimate(
            truck_type=data.truckType,
            items=data.items,
            options=data.options,
            truck_types=self.truck_types.get_active_types(),
            distance=data.distance,
            time_surcharges=data.timeSurcharges,
            tax_rate=data.taxRate,
            move_date=data.moveDate,
            season_rules=self.season_rules.get_active_rules() if data.moveDate else None,
        )
        logger.debug(f"Estimate for {data.truckType}: {result.total}")
        return result

    def compare(self, estimates: list[EstimateResult]) -> EstimateComparison:
        try:
            return compare_estimates(estimates)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
