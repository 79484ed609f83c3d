"""Shift service - Business logic for shift scheduling"""

import logging
from datetime import date, time
from typing import Optional, Union

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Shift
from ...shared.validators import time_to_minutes
from .repository import ShiftRepository
from .schemas import ShiftCreate, ShiftUpdate

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

# Statuses that count as work time
WORKING_STATUSES = ["working", "scheduled"]

TimeLike = Union[str, time]


def is_time_overlap(start1: TimeLike, end1: TimeLike, start2: TimeLike, end2: TimeLike) -> bool:
    """True when two time ranges on the same day overlap; touching ranges do not"""
    return time_to_minutes(start1) < time_to_minutes(end2) and time_to_minutes(
        start2
    ) < time_to_minutes(end1)


def shift_work_minutes(start: TimeLike, end: TimeLike, break_minutes: Optional[int] = 0) -> int:
    """Worked minutes in a shift; an end of 00:00 means midnight at the end of the day"""
    start_minutes = time_to_minutes(start)
    end_minutes = time_to_minutes(end) or MINUTES_PER_DAY
    return max(0, end_minutes - start_minutes - (break_minutes or 0))


class ShiftService:
    """Service layer for shifts"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ShiftRepository()

    def get_shifts(
        self,
        employee_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Shift]:
        return self.repo.get_shifts(self.db, employee_id, start_date, end_date)

    def get_shift(self, shift_id: str) -> Shift:
        shift = self.repo.get_shift_by_id(self.db, shift_id)
        if not shift:
            raise HTTPException(status_code=404, detail="Shift not found")
        return shift

    def create_shift(self, data: ShiftCreate) -> Shift:
        if not self.repo.get_employee(self.db, data.employee_id):
            raise HTTPException(status_code=404, detail="Employee not found")

        if self.repo.get_shift_on_date(self.db, data.employee_id, data.shift_date):
            raise HTTPException(
                status_code=409, detail="Shift already exists for this employee on this date"
            )

        shift = self.repo.create_shift(self.db, **data.model_dump())
        logger.info(f"Created shift {shift.id} for employee {shift.employee_id} on {shift.shift_date}")
        return shift

    def update_shift(self, shift_id: str, data: ShiftUpdate) -> Shift:
        shift = self.get_shift(shift_id)
        # Columns are all NOT NULL except notes, so explicit nulls are ignored
        updates = {
            k: v
            for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k == "notes"
        }

        new_date = updates.get("shift_date")
        if new_date and new_date != shift.shift_date:
            if self.repo.get_shift_on_date(self.db, shift.employee_id, new_date):
                raise HTTPException(
                    status_code=409, detail="Shift already exists for this employee on this date"
                )

        shift = self.repo.update_shift(self.db, shift, **updates)
        logger.info(f"Updated shift {shift_id}: {sorted(updates)}")
        return shift

    def delete_shift(self, shift_id: str) -> None:
        shift = self.get_shift(shift_id)
        self.repo.delete_shift(self.db, shift)
        logger.info(f"Deleted shift {shift_id}")

    def get_monthly_work_stats(self, employee_id: str, year: int, month: int) -> dict:
        """Working days and minutes of an employee in one calendar month"""
        first_day = date(year, month, 1)
        last_day = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
        shifts = [
            s
            for s in self.repo.get_shifts(
                self.db, employee_id, first_day, None, statuses=WORKING_STATUSES
            )
            if s.shift_date < last_day
        ]

        minutes = sum(shift_work_minutes(s.start_time, s.end_time, s.break_minutes) for s in shifts)
        return {
            "working_days": len({s.shift_date for s in shifts}),
            "working_minutes": minutes,
        }
