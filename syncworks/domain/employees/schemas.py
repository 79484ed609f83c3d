"""Employee schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...shared.validators import NonBlankStr, parse_date_string, parse_optional_date


class EmployeeCreate(BaseModel):
    """Schema for registering an employee"""

    company_id: NonBlankStr
    user_id: Optional[str] = None
    employee_number: NonBlankStr
    last_name: NonBlankStr
    first_name: NonBlankStr
    last_name_kana: Optional[str] = None
    first_name_kana: Optional[str] = None
    email: Optional[str] = None
    role: NonBlankStr
    employment_type: str = "full_time"
    qualifications: list[str] = []
    hire_date: date
    termination_date: Optional[date] = None
    birth_date: Optional[date] = None
    postal_code: Optional[str] = None
    prefecture: Optional[str] = None
    city: Optional[str] = None
    address_line: Optional[str] = None
    phone_number: NonBlankStr
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    hourly_rate: Optional[int] = Field(None, ge=0)
    max_work_hours_per_day: int = Field(8, gt=0, le=24)
    max_work_days_per_month: int = Field(25, gt=0, le=31)
    points_balance: int = 0
    is_active: bool = True

    @field_validator("hire_date", mode="before")
    @classmethod
    def parse_hire_date(cls, v):
        return parse_date_string(v)

    @field_validator("termination_date", "birth_date", mode="before")
    @classmethod
    def parse_optional_dates(cls, v):
        return parse_optional_date(v)


class EmployeeUpdate(BaseModel):
    """Partial update; only fields present in the body are written"""

    user_id: Optional[str] = None
    employee_number: Optional[NonBlankStr] = None
    last_name: Optional[NonBlankStr] = None
    first_name: Optional[NonBlankStr] = None
    last_name_kana: Optional[str] = None
    first_name_kana: Optional[str] = None
    email: Optional[str] = None
    role: Optional[NonBlankStr] = None
    employment_type: Optional[str] = None
    qualifications: Optional[list[str]] = None
    hire_date: Optional[date] = None
    termination_date: Optional[date] = None
    birth_date: Optional[date] = None
    postal_code: Optional[str] = None
    prefecture: Optional[str] = None
    city: Optional[str] = None
    address_line: Optional[str] = None
    phone_number: Optional[NonBlankStr] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    hourly_rate: Optional[int] = Field(None, ge=0)
    max_work_hours_per_day: Optional[int] = Field(None, gt=0, le=24)
    max_work_days_per_month: Optional[int] = Field(None, gt=0, le=31)
    points_balance: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator("hire_date", "termination_date", "birth_date", mode="before")
    @classmethod
    def parse_dates(cls, v):
        return parse_optional_date(v)


class CompanySummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    company_name: str


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    display_name: Optional[str] = None


class EmployeeResponse(BaseModel):
    """Schema for employee response"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    company_id: str
    user_id: Optional[str] = None
    employee_number: str
    last_name: str
    first_name: str
    last_name_kana: Optional[str] = None
    first_name_kana: Optional[str] = None
    email: Optional[str] = None
    role: str
    employment_type: str
    qualifications: Optional[list[str]] = None
    hire_date: date
    termination_date: Optional[date] = None
    birth_date: Optional[date] = None
    postal_code: Optional[str] = None
    prefecture: Optional[str] = None
    city: Optional[str] = None
    address_line: Optional[str] = None
    phone_number: str
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    hourly_rate: Optional[int] = None
    max_work_hours_per_day: int
    max_work_days_per_month: int
    points_balance: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    company: Optional[CompanySummary] = None
    user: Optional[UserSummary] = None


class MonthlyWorkStats(BaseModel):
    employeeId: str
    year: int
    month: int
    workingDays: int
    workingMinutes: int
    workingHours: float
