"""Shift schemas - Pydantic models for validation"""

from datetime import date, datetime, time
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ...shared.validators import NonBlankStr, format_time, parse_date_string, parse_time

ShiftStatus = Literal["scheduled", "working", "unavailable", "cancelled"]


class ShiftCreate(BaseModel):
    """Schema for creating a shift; a missing time range means the whole day"""

    employee_id: NonBlankStr
    shift_date: date
    shift_type: str = "regular"
    start_time: time = time(0, 0)
    end_time: time = time(23, 59)
    break_minutes: int = Field(60, ge=0)
    status: ShiftStatus = "scheduled"
    notes: Optional[str] = None

    @field_validator("shift_date", mode="before")
    @classmethod
    def parse_shift_date(cls, v):
        return parse_date_string(v)

    @field_validator("start_time", mode="before")
    @classmethod
    def parse_start_time(cls, v):
        return parse_time(v) if v else time(0, 0)

    @field_validator("end_time", mode="before")
    @classmethod
    def parse_end_time(cls, v):
        return parse_time(v) if v else time(23, 59)


class ShiftUpdate(BaseModel):
    """Partial update; only fields present in the body are written"""

    shift_date: Optional[date] = None
    shift_type: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    break_minutes: Optional[int] = Field(None, ge=0)
    status: Optional[ShiftStatus] = None
    notes: Optional[str] = None

    @field_validator("shift_date", mode="before")
    @classmethod
    def parse_shift_date(cls, v):
        return parse_date_string(v) if v is not None else None

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_times(cls, v):
        return parse_time(v) if v is not None else None


class EmployeeSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    last_name: str
    first_name: str
    employee_number: str


class ShiftResponse(BaseModel):
    """Schema for shift response; times are rendered as HH:MM"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    employee_id: str
    shift_date: date
    shift_type: str
    start_time: time
    end_time: time
    break_minutes: int
    status: str
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("start_time", "end_time")
    def serialize_time(self, value: time) -> str:
        return format_time(value)


class ShiftWithEmployee(ShiftResponse):
    employee: Optional[EmployeeSummary] = None
