"""Quote request router - FastAPI endpoints for quote intake"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from ...database import get_db
from ...shared.numbers import format_price_jpy
from .schemas import EstimateAttach, QuoteRequestCreate, QuoteRequestResponse
from .service import QuoteRequestService

router = APIRouter(prefix="/api/quote-requests", tags=["Quote Requests"])


def get_quote_request_service(db: Session = Depends(get_db)) -> QuoteRequestService:
    """Dependency injection for QuoteRequestService"""
    return QuoteRequestService(db)


def _dump(quote) -> dict:
    return QuoteRequestResponse.model_validate(quote).model_dump(mode="json")


@router.get("")
async def list_quote_requests(
    status: Optional[str] = Query(None),
    customer_email: Optional[str] = Query(None),
    referrer_agent_id: Optional[str] = Query(None),
    service: QuoteRequestService = Depends(get_quote_request_service),
):
    """Quote requests, newest first"""
    quotes = service.get_quote_requests(status, customer_email, referrer_agent_id)
    return {"success": True, "data": [_dump(q) for q in quotes], "count": len(quotes)}


@router.post("", status_code=201)
async def create_quote_request(
    data: QuoteRequestCreate,
    service: QuoteRequestService = Depends(get_quote_request_service),
):
    quote = service.create_quote_request(data)
    return {"success": True, "data": _dump(quote), "message": "Quote request received"}


@router.get("/{quote_id}")
async def get_quote_request(
    quote_id: str, service: QuoteRequestService = Depends(get_quote_request_service)
):
    return {"success": True, "data": _dump(service.get_quote_request(quote_id))}


@router.post("/{quote_id}/estimate")
async def attach_estimate(
    quote_id: str,
    data: EstimateAttach,
    service: QuoteRequestService = Depends(get_quote_request_service),
):
    quote, result = service.attach_estimate(quote_id, data)
    return {
        "success": True,
        "data": _dump(quote),
        "estimate": {**result.model_dump(), "formattedTotal": format_price_jpy(result.total)},
        "message": "Estimate attached",
    }


@router.get("/{quote_id}/estimate/pdf")
async def get_estimate_pdf(
    quote_id: str, service: QuoteRequestService = Depends(get_quote_request_service)
):
    pdf_bytes = service.render_estimate_pdf(quote_id)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="estimate-{quote_id}.pdf"'},
    )
