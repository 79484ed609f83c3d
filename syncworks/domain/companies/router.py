"""Company router - Registration and company profile endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import CompanyResponse, CompanyUpdate, RegistrationRequest
from .service import CompanyService

router = APIRouter(prefix="/api/companies", tags=["Companies"])


def get_company_service(db: Session = Depends(get_db)) -> CompanyService:
    """Dependency injection for CompanyService"""
    return CompanyService(db)


def _dump(company) -> dict:
    return CompanyResponse.model_validate(company).model_dump(mode="json")


@router.post("")
async def register_company(
    data: RegistrationRequest,
    service: CompanyService = Depends(get_company_service),
):
    """Register a mover or referrer account"""
    user = service.register(data)
    return {"success": True, "userId": user.id}


@router.get("/by-email")
async def get_company_by_email(
    email: Optional[str] = Query(None),
    service: CompanyService = Depends(get_company_service),
):
    """First company owned by the user with this email"""
    return {"success": True, "data": _dump(service.get_company_by_email(email))}


@router.get("/{company_id}")
async def get_company(company_id: str, service: CompanyService = Depends(get_company_service)):
    return {"success": True, "data": _dump(service.get_company(company_id))}


@router.put("/{company_id}")
async def update_company(
    company_id: str,
    data: CompanyUpdate,
    service: CompanyService = Depends(get_company_service),
):
    company = service.update_company(company_id, data)
    return {"success": True, "data": _dump(company), "message": "Company updated successfully"}
