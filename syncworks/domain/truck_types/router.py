"""Truck type router - FastAPI endpoints for the truck type catalogue"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import require_roles
from ...database import get_db
from .schemas import TruckTypeBulkSave, TruckTypeInput
from .service import TruckTypeService

router = APIRouter(prefix="/api/truck-types", tags=["Truck Types"])

catalogue_admin = require_roles("system_admin", "company_admin")


def get_truck_type_service(db: Session = Depends(get_db)) -> TruckTypeService:
    """Dependency injection for TruckTypeService"""
    return TruckTypeService(db)


@router.get("")
async def list_truck_types(service: TruckTypeService = Depends(get_truck_type_service)):
    types = service.get_active_types()
    return {"success": True, "data": [t.model_dump() for t in types]}


@router.get("/recommend")
async def recommend_truck_types(
    points: float = Query(..., ge=0),
    service: TruckTypeService = Depends(get_truck_type_service),
):
    """Recommended truck types for a load measured in points"""
    recommendations = service.recommend(points)
    return {
        "success": True,
        "data": {
            "points": points,
            "recommended": recommendations[0] if recommendations else None,
            "recommendations": recommendations,
        },
    }


@router.post("", dependencies=[Depends(catalogue_admin)])
async def create_truck_type(
    data: TruckTypeInput,
    service: TruckTypeService = Depends(get_truck_type_service),
):
    truck_type = service.create_type(data)
    return {"success": True, "data": truck_type.model_dump()}


@router.put("", dependencies=[Depends(catalogue_admin)])
async def save_truck_types(
    data: TruckTypeBulkSave,
    service: TruckTypeService = Depends(get_truck_type_service),
):
    types = service.save_types(data.truckTypes)
    return {"success": True, "data": [t.model_dump() for t in types]}


@router.delete("", dependencies=[Depends(catalogue_admin)])
async def delete_truck_type(
    id: Optional[str] = Query(None),
    service: TruckTypeService = Depends(get_truck_type_service),
):
    service.delete_type(id)
    return {"success": True}
