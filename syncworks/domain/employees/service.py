"""Employee service - Business logic for employees"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import Employee, Shift
from ..shifts.service import ShiftService
from .repository import EmployeeRepository
from .schemas import EmployeeCreate, EmployeeUpdate

logger = logging.getLogger(__name__)

# Columns that may not be cleared with an explicit null
REQUIRED_COLUMNS = {
    "employee_number",
    "last_name",
    "first_name",
    "role",
    "employment_type",
    "hire_date",
    "phone_number",
    "max_work_hours_per_day",
    "max_work_days_per_month",
    "points_balance",
    "is_active",
}


class EmployeeService:
    """Service layer for employees"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = EmployeeRepository()

    def get_employees(self, company_id: Optional[str] = None) -> list[Employee]:
        return self.repo.get_active_employees(self.db, company_id)

    def get_employee(self, employee_id: str) -> Employee:
        employee = self.repo.get_employee_by_id(self.db, employee_id)
        if not employee:
            raise HTTPException(status_code=404, detail="Employee not found")
        return employee

    def get_recent_shifts(self, employee_id: str, limit: int = 10) -> list[Shift]:
        return ShiftService(self.db).repo.get_recent_shifts(self.db, employee_id, limit)

    def create_employee(self, data: EmployeeCreate) -> Employee:
        if not self.repo.company_exists(self.db, data.company_id):
            raise HTTPException(status_code=404, detail="Company not found")

        if self.repo.get_employee_by_number(self.db, data.company_id, data.employee_number):
            raise HTTPException(
                status_code=409, detail="Employee number already exists for this company"
            )

        if data.user_id and not self.repo.user_exists(self.db, data.user_id):
            raise HTTPException(status_code=404, detail="User not found")

        try:
            employee = self.repo.create_employee(self.db, **data.model_dump())
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Employee insert rejected by database: {e}")
            raise HTTPException(status_code=409, detail="Employee conflicts with an existing record") from e

        logger.info(f"Created employee {employee.id} ({employee.employee_number}) for company {employee.company_id}")
        return employee

    def update_employee(self, employee_id: str, data: EmployeeUpdate) -> Employee:
        employee = self.get_employee(employee_id)
        updates = data.model_dump(exclude_unset=True)

        for field, value in updates.items():
            if value is None and field in REQUIRED_COLUMNS:
                raise HTTPException(status_code=400, detail=f"Field cannot be null: {field}")

        number = updates.get("employee_number")
        if number and number != employee.employee_number:
            duplicate = self.repo.get_employee_by_number(self.db, employee.company_id, number)
            if duplicate and duplicate.id != employee.id:
                raise HTTPException(
                    status_code=409, detail="Employee number already exists for this company"
                )

        user_id = updates.get("user_id")
        if user_id and not self.repo.user_exists(self.db, user_id):
            raise HTTPException(status_code=404, detail="User not found")

        try:
            employee = self.repo.update_employee(self.db, employee, **updates)
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Employee update {employee_id} rejected by database: {e}")
            raise HTTPException(status_code=409, detail="Employee conflicts with an existing record") from e

        logger.info(f"Updated employee {employee_id}: {sorted(updates)}")
        return employee

    def deactivate_employee(self, employee_id: str) -> Employee:
        """Soft delete: shifts and history stay attached to the record"""
        employee = self.get_employee(employee_id)
        updates = {"is_active": False}
        if employee.termination_date is None:
            updates["termination_date"] = date.today()

        employee = self.repo.update_employee(self.db, employee, **updates)
        logger.info(f"Deactivated employee {employee_id}")
        return employee

    def get_monthly_stats(self, employee_id: str, year: int, month: int) -> dict:
        self.get_employee(employee_id)
        stats = ShiftService(self.db).get_monthly_work_stats(employee_id, year, month)
        return {
            "employeeId": employee_id,
            "year": year,
            "month": month,
            "workingDays": stats["working_days"],
            "workingMinutes": stats["working_minutes"],
            "workingHours": round(stats["working_minutes"] / 60, 2),
        }
