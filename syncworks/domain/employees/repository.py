"""Employee repository - Database operations for employees"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Employee, MovingCompany, User


class EmployeeRepository:
    """Repository for employee database operations"""

    @staticmethod
    def get_active_employees(db: Session, company_id: Optional[str] = None) -> list[Employee]:
        query = (
            db.query(Employee)
            .options(joinedload(Employee.company), joinedload(Employee.user))
            .filter(Employee.is_active.is_(True))
        )
        if company_id:
            query = query.filter(Employee.company_id == company_id)
        return query.order_by(Employee.created_at.desc()).all()

    @staticmethod
    def get_employee_by_id(db: Session, employee_id: str) -> Optional[Employee]:
        return (
            db.query(Employee)
            .options(joinedload(Employee.company), joinedload(Employee.user))
            .filter(Employee.id == employee_id)
            .first()
        )

    @staticmethod
    def get_employee_by_number(
        db: Session, company_id: str, employee_number: str
    ) -> Optional[Employee]:
        return (
            db.query(Employee)
            .filter(Employee.company_id == company_id, Employee.employee_number == employee_number)
            .first()
        )

    @staticmethod
    def company_exists(db: Session, company_id: str) -> bool:
        return db.query(MovingCompany.id).filter(MovingCompany.id == company_id).first() is not None

    @staticmethod
    def user_exists(db: Session, user_id: str) -> bool:
        return db.query(User.id).filter(User.id == user_id).first() is not None

    @staticmethod
    def create_employee(db: Session, **employee_data) -> Employee:
        employee = Employee(**employee_data)
        db.add(employee)
        db.commit()
        db.refresh(employee)
        return employee

    @staticmethod
    def update_employee(db: Session, employee: Employee, **updates) -> Employee:
        for key, value in updates.items():
            setattr(employee, key, value)
        db.commit()
        db.refresh(employee)
        return employee
