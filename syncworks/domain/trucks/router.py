"""Truck router - FastAPI endpoints for the truck fleet"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import TruckCreate, TruckResponse, TruckUpdate
from .service import TruckService

router = APIRouter(prefix="/api/trucks", tags=["Trucks"])


def get_truck_service(db: Session = Depends(get_db)) -> TruckService:
    """Dependency injection for TruckService"""
    return TruckService(db)


def _dump(truck) -> dict:
    return TruckResponse.model_validate(truck).model_dump(mode="json")


@router.get("")
async def list_trucks(
    company_id: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    service: TruckService = Depends(get_truck_service),
):
    """Trucks, newest first"""
    trucks = service.get_trucks(company_id, status)
    return {"success": True, "data": [_dump(t) for t in trucks], "count": len(trucks)}


@router.post("")
async def create_truck(data: TruckCreate, service: TruckService = Depends(get_truck_service)):
    truck = service.create_truck(data)
    return {"success": True, "data": _dump(truck), "message": "Truck created successfully"}


@router.get("/{truck_id}")
async def get_truck(truck_id: str, service: TruckService = Depends(get_truck_service)):
    return {"success": True, "data": _dump(service.get_truck(truck_id))}


@router.put("/{truck_id}")
async def update_truck(
    truck_id: str,
    data: TruckUpdate,
    service: TruckService = Depends(get_truck_service),
):
    truck = service.update_truck(truck_id, data)
    return {"success": True, "data": _dump(truck), "message": "Truck updated successfully"}


@router.delete("/{truck_id}")
async def delete_truck(truck_id: str, service: TruckService = Depends(get_truck_service)):
    result = service.delete_truck(truck_id)
    return {"success": True, "message": result["message"]}
