"""Quote request service - Business logic for quote intake and estimates"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import QuoteRequest
from ...services.estimate_pdf import EstimatePDFGenerator
from ..pricing.schemas import EstimateRequest, EstimateResult
from ..pricing.service import PricingService
from .repository import QuoteRequestRepository
from .schemas import EstimateAttach, QuoteRequestCreate

logger = logging.getLogger(__name__)


class QuoteRequestService:
    """Service layer for quote requests"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = QuoteRequestRepository()

    def get_quote_requests(
        self,
        status: Optional[str] = None,
        customer_email: Optional[str] = None,
        referrer_agent_id: Optional[str] = None,
    ) -> list[QuoteRequest]:
        return self.repo.get_quote_requests(self.db, status, customer_email, referrer_agent_id)

    def get_quote_request(self, quote_id: str) -> QuoteRequest:
        quote = self.repo.get_quote_request_by_id(self.db, quote_id)
        if not quote:
            raise HTTPException(status_code=404, detail="Quote request not found")
        return quote

    def create_quote_request(self, data: QuoteRequestCreate) -> QuoteRequest:
        quote = self.repo.create_quote_request(self.db, **data.model_dump())
        logger.info(f"Created quote request {quote.id} via {quote.request_source}")
        return quote

    def attach_estimate(self, quote_id: str, data: EstimateAttach) -> tuple[QuoteRequest, EstimateResult]:
        """Price the move, store the breakdown on the request and mark it quoted"""
        quote = self.get_quote_request(quote_id)

        request = EstimateRequest(
            truckType=data.truckType,
            items=data.items,
            options=data.options,
            distance=data.distance if data.distance is not None else (quote.distance_km or 0),
            timeSurcharges=data.timeSurcharges,
            taxRate=data.taxRate,
            moveDate=data.moveDate or quote.preferred_date_1,
        )
        result = PricingService(self.db).estimate(request)

        quote = self.repo.update_quote_request(
            self.db,
            quote,
            estimate_truck_type=data.truckType,
            estimate_breakdown=result.model_dump(),
            estimated_price=result.total,
            estimated_at=datetime.utcnow(),
            status="quoted",
        )
        logger.info(f"Attached estimate to quote request {quote_id}: {result.total}")
        return quote, result

    def render_estimate_pdf(self, quote_id: str) -> bytes:
        quote = self.get_quote_request(quote_id)
        if not quote.estimate_breakdown:
            raise HTTPException(status_code=404, detail="No estimate for this quote request")
        return EstimatePDFGenerator(quote).generate()
