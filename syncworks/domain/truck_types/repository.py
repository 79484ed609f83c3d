"""Truck type repository - Database operations for truck types"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import TruckType


class TruckTypeRepository:
    """Repository for truck type database operations"""

    @staticmethod
    def get_active_types(db: Session) -> list[TruckType]:
        return (
            db.query(TruckType)
            .filter(TruckType.is_active.is_(True))
            .order_by(TruckType.sort_order.asc())
            .all()
        )

    @staticmethod
    def get_type_by_id(db: Session, type_id: str) -> Optional[TruckType]:
        return db.query(TruckType).filter(TruckType.id == type_id).first()

    @staticmethod
    def get_type_by_name(db: Session, name: str) -> Optional[TruckType]:
        return db.query(TruckType).filter(TruckType.name == name).first()

    @staticmethod
    def count_types(db: Session) -> int:
        return db.query(TruckType).count()

    @staticmethod
    def create_type(db: Session, **type_data) -> TruckType:
        truck_type = TruckType(**type_data)
        db.add(truck_type)
        db.commit()
        db.refresh(truck_type)
        return truck_type

    @staticmethod
    def delete_type(db: Session, truck_type: TruckType) -> None:
        db.delete(truck_type)
        db.commit()

    @staticmethod
    def save_types(db: Session, rows: list[tuple[Optional[TruckType], dict]]) -> list[TruckType]:
        """Apply creates and updates in one transaction; rolls back on any failure"""
        saved = []
        try:
            for existing, data in rows:
                if existing is None:
                    truck_type = TruckType(**data)
                    db.add(truck_type)
                else:
                    truck_type = existing
                    for key, value in data.items():
                        setattr(truck_type, key, value)
                saved.append(truck_type)
            db.commit()
        except Exception:
            db.rollback()
            raise

        for truck_type in saved:
            db.refresh(truck_type)
        return saved
