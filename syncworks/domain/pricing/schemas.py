"""Pricing schemas - Pydantic models for estimate calculation"""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import parse_optional_date


class CargoItem(BaseModel):
    name: str = ""
    points: float = Field(0, ge=0)
    weight: Optional[float] = Field(None, ge=0)  # kg
    quantity: int = Field(1, ge=0)


class WorkOption(BaseModel):
    name: str = ""
    price: int = 0
    selected: bool = True


class TimeBandSurcharge(BaseModel):
    """Surcharge for a time band: kind "rate" multiplies, "fixed" adds yen"""

    id: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    kind: Literal["rate", "fixed"]
    value: float


class SeasonDetail(BaseModel):
    name: str
    adjustment: int


class EstimateRequest(BaseModel):
    truckType: Optional[str] = None
    items: list[CargoItem] = []
    options: list[WorkOption] = []
    distance: float = Field(0, ge=0)  # km
    timeSurcharges: list[TimeBandSurcharge] = []
    taxRate: Optional[float] = Field(None, ge=0, le=1)
    moveDate: Optional[date] = None

    @field_validator("moveDate", mode="before")
    @classmethod
    def parse_move_date(cls, v):
        return parse_optional_date(v)


class EstimateResult(BaseModel):
    basePrice: int
    cargoPrice: int
    optionPrice: int
    distancePrice: int
    timeSurcharge: int
    seasonAdjustment: int = 0
    seasonDetails: list[SeasonDetail] = []
    subtotal: int  # tax excluded
    tax: int
    total: int  # tax included
    totalPoints: float = 0
    totalWeight: float = 0
    recommendedTruckTypes: list[str] = []


class CompareRequest(BaseModel):
    estimates: list[EstimateResult]


class EstimateComparison(BaseModel):
    cheapest: EstimateResult
    mostExpensive: EstimateResult
    averagePrice: int
