"""Employee router - FastAPI endpoints for employees"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ..shifts.schemas import ShiftResponse
from .schemas import EmployeeCreate, EmployeeResponse, EmployeeUpdate, MonthlyWorkStats
from .service import EmployeeService

router = APIRouter(prefix="/api/employees", tags=["Employees"])


def get_employee_service(db: Session = Depends(get_db)) -> EmployeeService:
    """Dependency injection for EmployeeService"""
    return EmployeeService(db)


def _dump(employee) -> dict:
    return EmployeeResponse.model_validate(employee).model_dump(mode="json")


@router.get("")
async def list_employees(
    company_id: Optional[str] = Query(None),
    service: EmployeeService = Depends(get_employee_service),
):
    """Active employees, newest first"""
    employees = service.get_employees(company_id)
    return {"success": True, "data": [_dump(e) for e in employees], "count": len(employees)}


@router.post("", status_code=201)
async def create_employee(
    data: EmployeeCreate,
    service: EmployeeService = Depends(get_employee_service),
):
    employee = service.create_employee(data)
    return {"success": True, "data": _dump(employee), "message": "Employee created successfully"}


@router.get("/{employee_id}")
async def get_employee(employee_id: str, service: EmployeeService = Depends(get_employee_service)):
    """Employee detail with the 10 most recent shifts"""
    employee = service.get_employee(employee_id)
    shifts = service.get_recent_shifts(employee_id)
    data = _dump(employee)
    data["shifts"] = [ShiftResponse.model_validate(s).model_dump(mode="json") for s in shifts]
    return {"success": True, "data": data}


@router.put("/{employee_id}")
async def update_employee(
    employee_id: str,
    data: EmployeeUpdate,
    service: EmployeeService = Depends(get_employee_service),
):
    employee = service.update_employee(employee_id, data)
    return {"success": True, "data": _dump(employee), "message": "Employee updated successfully"}


@router.delete("/{employee_id}")
async def delete_employee(
    employee_id: str, service: EmployeeService = Depends(get_employee_service)
):
    employee = service.deactivate_employee(employee_id)
    return {
        "success": True,
        "data": _dump(employee),
        "message": "Employee deactivated successfully",
    }


@router.get("/{employee_id}/monthly-stats")
async def get_monthly_stats(
    employee_id: str,
    year: Optional[int] = Query(None, ge=1900, le=2999),
    month: Optional[int] = Query(None, ge=1, le=12),
    service: EmployeeService = Depends(get_employee_service),
):
    """Working days and minutes for a month (defaults to the current month)"""
    today = date.today()
    stats = service.get_monthly_stats(employee_id, year or today.year, month or today.month)
    return {"success": True, "data": MonthlyWorkStats(**stats).model_dump()}
