"""Truck schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...shared.validators import NonBlankStr, parse_date_string, parse_optional_date

TruckStatus = Literal["available", "maintenance", "inactive", "retired"]


class TruckCreate(BaseModel):
    """Schema for registering a truck"""

    company_id: NonBlankStr
    truck_number: NonBlankStr
    license_plate: NonBlankStr
    truck_type: NonBlankStr
    capacity_cbm: float = Field(gt=0)
    max_load_kg: int = Field(gt=0)
    has_lift_gate: bool = False
    has_air_conditioning: bool = False
    manufacture_year: Optional[int] = None
    manufacturer: Optional[str] = None
    model_name: Optional[str] = None
    last_inspection_date: Optional[date] = None
    next_inspection_date: date
    fuel_type: Optional[str] = None
    fuel_efficiency_kmpl: Optional[float] = None
    insurance_expiry_date: date
    status: TruckStatus = "available"

    model_config = ConfigDict(protected_namespaces=())

    @field_validator("next_inspection_date", "insurance_expiry_date", mode="before")
    @classmethod
    def parse_required_dates(cls, v):
        return parse_date_string(v)

    @field_validator("last_inspection_date", mode="before")
    @classmethod
    def parse_last_inspection(cls, v):
        return parse_optional_date(v)


class TruckUpdate(BaseModel):
    """Partial update; only fields present in the body are written"""

    truck_number: Optional[NonBlankStr] = None
    license_plate: Optional[NonBlankStr] = None
    truck_type: Optional[NonBlankStr] = None
    capacity_cbm: Optional[float] = Field(None, gt=0)
    max_load_kg: Optional[int] = Field(None, gt=0)
    has_lift_gate: Optional[bool] = None
    has_air_conditioning: Optional[bool] = None
    manufacture_year: Optional[int] = None
    manufacturer: Optional[str] = None
    model_name: Optional[str] = None
    last_inspection_date: Optional[date] = None
    next_inspection_date: Optional[date] = None
    fuel_type: Optional[str] = None
    fuel_efficiency_kmpl: Optional[float] = None
    insurance_expiry_date: Optional[date] = None
    status: Optional[TruckStatus] = None

    model_config = ConfigDict(protected_namespaces=())

    @field_validator(
        "last_inspection_date", "next_inspection_date", "insurance_expiry_date", mode="before"
    )
    @classmethod
    def parse_dates(cls, v):
        return parse_optional_date(v)


class TruckResponse(BaseModel):
    """Schema for truck response"""

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())

    id: str
    company_id: str
    truck_number: str
    license_plate: str
    truck_type: str
    capacity_cbm: float
    max_load_kg: int
    has_lift_gate: bool
    has_air_conditioning: bool
    manufacture_year: Optional[int] = None
    manufacturer: Optional[str] = None
    model_name: Optional[str] = None
    last_inspection_date: Optional[date] = None
    next_inspection_date: date
    fuel_type: Optional[str] = None
    fuel_efficiency_kmpl: Optional[float] = None
    insurance_expiry_date: date
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
