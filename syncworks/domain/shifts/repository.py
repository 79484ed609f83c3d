"""Shift repository - Database operations for shifts"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Employee, Shift


class ShiftRepository:
    """Repository for shift database operations"""

    @staticmethod
    def get_shifts(
        db: Session,
        employee_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        statuses: Optional[list[str]] = None,
    ) -> list[Shift]:
        query = db.query(Shift).options(joinedload(Shift.employee))
        if employee_id:
            query = query.filter(Shift.employee_id == employee_id)
        if start_date:
            query = query.filter(Shift.shift_date >= start_date)
        if end_date:
            query = query.filter(Shift.shift_date <= end_date)
        if statuses:
            query = query.filter(Shift.status.in_(statuses))
        return query.order_by(Shift.shift_date.asc(), Shift.start_time.asc()).all()

    @staticmethod
    def get_recent_shifts(db: Session, employee_id: str, limit: int = 10) -> list[Shift]:
        return (
            db.query(Shift)
            .filter(Shift.employee_id == employee_id)
            .order_by(Shift.shift_date.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def get_shift_by_id(db: Session, shift_id: str) -> Optional[Shift]:
        return (
            db.query(Shift)
            .options(joinedload(Shift.employee))
            .filter(Shift.id == shift_id)
            .first()
        )

    @staticmethod
    def get_shift_on_date(db: Session, employee_id: str, shift_date: date) -> Optional[Shift]:
        return (
            db.query(Shift)
            .filter(Shift.employee_id == employee_id, Shift.shift_date == shift_date)
            .first()
        )

    @staticmethod
    def get_employee(db: Session, employee_id: str) -> Optional[Employee]:
        return db.query(Employee).filter(Employee.id == employee_id).first()

    @staticmethod
    def create_shift(db: Session, **shift_data) -> Shift:
        shift = Shift(**shift_data)
        db.add(shift)
        db.commit()
        db.refresh(shift)
        return shift

    @staticmethod
    def update_shift(db: Session, shift: Shift, **updates) -> Shift:
        for key, value in updates.items():
            setattr(shift, key, value)
        db.commit()
        db.refresh(shift)
        return shift

    @staticmethod
    def delete_shift(db: Session, shift: Shift) -> None:
        db.delete(shift)
        db.commit()
