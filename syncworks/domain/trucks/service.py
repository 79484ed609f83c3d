"""Truck service - Business logic for the truck fleet"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import Truck
from .repository import TruckRepository
from .schemas import TruckCreate, TruckUpdate

logger = logging.getLogger(__name__)

# Columns that may not be cleared with an explicit null
REQUIRED_COLUMNS = {
    "truck_number",
    "license_plate",
    "truck_type",
    "capacity_cbm",
    "max_load_kg",
    "has_lift_gate",
    "has_air_conditioning",
    "next_inspection_date",
    "insurance_expiry_date",
    "status",
}


class TruckService:
    """Service layer for trucks"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = TruckRepository()

    def get_trucks(self, company_id: Optional[str] = None, status: Optional[str] = None) -> list[Truck]:
        return self.repo.get_trucks(self.db, company_id, status)

    def get_truck(self, truck_id: str) -> Truck:
        truck = self.repo.get_truck_by_id(self.db, truck_id)
        if not truck:
            raise HTTPException(status_code=404, detail="Truck not found")
        return truck

    def create_truck(self, data: TruckCreate) -> Truck:
        if self.repo.get_truck_by_license_plate(self.db, data.license_plate):
            raise HTTPException(status_code=409, detail="License plate already exists")

        if self.repo.get_truck_by_number(self.db, data.company_id, data.truck_number):
            raise HTTPException(status_code=409, detail="Truck number already exists for this company")

        try:
            truck = self.repo.create_truck(self.db, **data.model_dump())
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Truck insert rejected by database: {e}")
            raise HTTPException(status_code=409, detail="Truck conflicts with an existing record") from e

        logger.info(f"Created truck {truck.id} ({truck.truck_number}) for company {truck.company_id}")
        return truck

    def update_truck(self, truck_id: str, data: TruckUpdate) -> Truck:
        truck = self.get_truck(truck_id)
        updates = data.model_dump(exclude_unset=True)

        for field, value in updates.items():
            if value is None and field in REQUIRED_COLUMNS:
                raise HTTPException(status_code=400, detail=f"Field cannot be null: {field}")

        plate = updates.get("license_plate")
        if plate and plate != truck.license_plate:
            if self.repo.get_truck_by_license_plate(self.db, plate):
                raise HTTPException(status_code=409, detail="License plate already exists")

        number = updates.get("truck_number")
        if number and number != truck.truck_number:
            if self.repo.get_truck_by_number(self.db, truck.company_id, number):
                raise HTTPException(
                    status_code=409, detail="Truck number already exists for this company"
                )

        try:
            truck = self.repo.update_truck(self.db, truck, **updates)
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Truck update {truck_id} rejected by database: {e}")
            raise HTTPException(status_code=409, detail="Truck conflicts with an existing record") from e

        logger.info(f"Updated truck {truck_id}: {sorted(updates)}")
        return truck

    def delete_truck(self, truck_id: str) -> dict:
        """Physically delete a truck, or retire it when other records still reference it"""
        truck = self.get_truck(truck_id)

        try:
            self.repo.delete_truck(self.db, truck)
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Physical delete of truck {truck_id} failed, retiring instead: {e}")
            truck = self.get_truck(truck_id)
            self.repo.update_truck(self.db, truck, status="retired")
            return {
                "retired": True,
                "message": "Truck retired successfully (physical delete not possible due to foreign key constraints)",
            }

        logger.info(f"Deleted truck {truck_id}")
        return {"retired": False, "message": "Truck deleted successfully"}
