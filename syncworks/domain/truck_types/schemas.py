"""Truck type schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, Field

from ...shared.validators import NonBlankStr


class TruckTypeInput(BaseModel):
    id: Optional[str] = None
    name: NonBlankStr
    displayName: Optional[str] = None
    basePrice: int = Field(0, ge=0)
    capacityKg: int = Field(0, ge=0)
    maxPoints: int = Field(0, ge=0)
    coefficient: float = 1.0
    sortOrder: Optional[int] = None


class TruckTypeBulkSave(BaseModel):
    truckTypes: list[TruckTypeInput]


class TruckTypeOut(BaseModel):
    """Truck type as returned by the API and kept in cache"""

    id: str
    name: str
    displayName: Optional[str] = None
    basePrice: int = 0
    capacityKg: int = 0
    maxPoints: int = 0
    coefficient: float = 1.0
    sortOrder: int = 0
