"""Shift router - FastAPI endpoints for shift scheduling"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...shared.validators import parse_optional_date
from .schemas import ShiftCreate, ShiftUpdate, ShiftWithEmployee
from .service import ShiftService

router = APIRouter(prefix="/api/shifts", tags=["Shifts"])


def get_shift_service(db: Session = Depends(get_db)) -> ShiftService:
    """Dependency injection for ShiftService"""
    return ShiftService(db)


def _dump(shift) -> dict:
    return ShiftWithEmployee.model_validate(shift).model_dump(mode="json")


@router.get("")
async def list_shifts(
    employee_id: Optional[str] = Query(None),
    start_date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    end_date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    service: ShiftService = Depends(get_shift_service),
):
    """Shifts ordered by date and start time"""
    try:
        start = parse_optional_date(start_date)
        end = parse_optional_date(end_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    shifts = service.get_shifts(employee_id, start, end)
    return {"success": True, "data": [_dump(s) for s in shifts], "count": len(shifts)}


@router.post("", status_code=201)
async def create_shift(data: ShiftCreate, service: ShiftService = Depends(get_shift_service)):
    shift = service.create_shift(data)
    return {"success": True, "data": _dump(shift), "message": "Shift created successfully"}


@router.get("/{shift_id}")
async def get_shift(shift_id: str, service: ShiftService = Depends(get_shift_service)):
    return {"success": True, "data": _dump(service.get_shift(shift_id))}


@router.put("/{shift_id}")
async def update_shift(
    shift_id: str,
    data: ShiftUpdate,
    service: ShiftService = Depends(get_shift_service),
):
    shift = service.update_shift(shift_id, data)
    return {"success": True, "data": _dump(shift), "message": "Shift updated successfully"}


@router.delete("/{shift_id}")
async def delete_shift(shift_id: str, service: ShiftService = Depends(get_shift_service)):
    service.delete_shift(shift_id)
    return {"success": True, "message": "Shift deleted successfully"}
