"""Truck repository - Database operations for trucks"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Truck


class TruckRepository:
    """Repository for truck database operations"""

    @staticmethod
    def get_trucks(
        db: Session, company_id: Optional[str] = None, status: Optional[str] = None
    ) -> list[Truck]:
        query = db.query(Truck)
        if company_id:
            query = query.filter(Truck.company_id == company_id)
        if status:
            query = query.filter(Truck.status == status)
        return query.order_by(Truck.created_at.desc()).all()

    @staticmethod
    def get_truck_by_id(db: Session, truck_id: str) -> Optional[Truck]:
        return db.query(Truck).filter(Truck.id == truck_id).first()

    @staticmethod
    def get_truck_by_license_plate(db: Session, license_plate: str) -> Optional[Truck]:
        return db.query(Truck).filter(Truck.license_plate == license_plate).first()

    @staticmethod
    def get_truck_by_number(db: Session, company_id: str, truck_number: str) -> Optional[Truck]:
        return (
            db.query(Truck)
            .filter(Truck.company_id == company_id, Truck.truck_number == truck_number)
            .first()
        )

    @staticmethod
    def create_truck(db: Session, **truck_data) -> Truck:
        truck = Truck(**truck_data)
        db.add(truck)
        db.commit()
        db.refresh(truck)
        return truck

    @staticmethod
    def update_truck(db: Session, truck: Truck, **updates) -> Truck:
        """Write every given field, including explicit nulls"""
        for key, value in updates.items():
            setattr(truck, key, value)
        db.commit()
        db.refresh(truck)
        return truck

    @staticmethod
    def delete_truck(db: Session, truck: Truck) -> None:
        db.delete(truck)
        db.commit()
