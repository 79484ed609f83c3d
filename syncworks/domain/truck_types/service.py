"""Truck type service - Business logic for the truck type catalogue"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...cache import TRUCK_TYPES_KEY, cache, invalidate_truck_types_cache
from ...config import TRUCK_TYPES_CACHE_TTL
from ...models import TruckType
from .repository import TruckTypeRepository
from .schemas import TruckTypeInput, TruckTypeOut

logger = logging.getLogger(__name__)

# Input field -> column, for fields copied as-is
_COLUMN_MAP = {
    "displayName": "display_name",
    "basePrice": "base_price",
    "capacityKg": "capacity_kg",
    "maxPoints": "max_points",
    "coefficient": "coefficient",
}


def to_truck_type_out(truck_type: TruckType) -> TruckTypeOut:
    return TruckTypeOut(
        id=truck_type.id,
        name=truck_type.name,
        displayName=truck_type.display_name,
        basePrice=truck_type.base_price,
        capacityKg=truck_type.capacity_kg,
        maxPoints=truck_type.max_points,
        coefficient=float(truck_type.coefficient),
        sortOrder=truck_type.sort_order,
    )


def recommend_truck_types(points: float, truck_types: list[TruckTypeOut]) -> list[str]:
    """
    Recommend truck type names for a load.

    Walks the types in sort order and picks the first one that can carry the
    points plus the next size up. When nothing is big enough the largest type
    is recommended.
    """
    ordered = sorted(truck_types, key=lambda t: t.sortOrder)
    for index, truck_type in enumerate(ordered):
        if points <= truck_type.maxPoints:
            return [t.name for t in ordered[index : index + 2]]
    return [ordered[-1].name] if ordered else []


def recommend_truck_type(points: float, truck_types: list[TruckTypeOut]) -> Optional[str]:
    recommendations = recommend_truck_types(points, truck_types)
    return recommendations[0] if recommendations else None


class TruckTypeService:
    """Service layer for truck types"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = TruckTypeRepository()

    def get_active_types(self) -> list[TruckTypeOut]:
        cached = cache.get(TRUCK_TYPES_KEY)
        if cached is not None:
            return [TruckTypeOut.model_validate(t) for t in cached]

        types = [to_truck_type_out(t) for t in self.repo.get_active_types(self.db)]
        cache.set(TRUCK_TYPES_KEY, [t.model_dump() for t in types], ttl=TRUCK_TYPES_CACHE_TTL)
        return types

    def create_type(self, data: TruckTypeInput) -> TruckTypeOut:
        name = data.name.strip()
        if self.repo.get_type_by_name(self.db, name):
            raise HTTPException(status_code=409, detail=f"Truck type already exists: {name}")

        sort_order = data.sortOrder
        if sort_order is None:
            sort_order = (self.repo.count_types(self.db) + 1) * 10

        columns = {column: getattr(data, field) for field, column in _COLUMN_MAP.items()}
        try:
            truck_type = self.repo.create_type(
                self.db, name=name, sort_order=sort_order, **columns
            )
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Truck type insert conflict for {name}: {e}")
            raise HTTPException(status_code=409, detail=f"Truck type already exists: {name}") from e

        invalidate_truck_types_cache()
        logger.info(f"Created truck type {truck_type.id} ({name})")
        return to_truck_type_out(truck_type)

    def delete_type(self, type_id: Optional[str]) -> None:
        if not type_id:
            raise HTTPException(status_code=400, detail="Truck type id is required")

        truck_type = self.repo.get_type_by_id(self.db, type_id)
        if not truck_type:
            raise HTTPException(status_code=404, detail="Truck type not found")

        self.repo.delete_type(self.db, truck_type)
        invalidate_truck_types_cache()
        logger.info(f"Deleted truck type {type_id}")

    def save_types(self, types: list[TruckTypeInput]) -> list[TruckTypeOut]:
        """Bulk upsert; unspecified sort orders follow list position (10, 20, ...)"""
        rows = []
        for index, data in enumerate(types):
            existing = None
            if data.id:
                existing = self.repo.get_type_by_id(self.db, data.id)
                if not existing:
                    raise HTTPException(status_code=404, detail=f"Truck type not found: {data.id}")

            columns = {
                "name": data.name.strip(),
                "sort_order": data.sortOrder if data.sortOrder is not None else (index + 1) * 10,
            }
            for field, column in _COLUMN_MAP.items():
                # Updates only touch the fields that were sent
                if existing is None or field in data.model_fields_set:
                    columns[column] = getattr(data, field)
            rows.append((existing, columns))

        try:
            saved = self.repo.save_types(self.db, rows)
        except IntegrityError as e:
            logger.warning(f"Truck type bulk save conflict: {e}")
            raise HTTPException(status_code=409, detail="Duplicate truck type name") from e

        invalidate_truck_types_cache()
        logger.info(f"Saved {len(saved)} truck types")
        return [to_truck_type_out(t) for t in saved]

    def recommend(self, points: float) -> list[str]:
        return recommend_truck_types(points, self.get_active_types())
