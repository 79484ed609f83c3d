"""Quote request schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...shared.validators import NonBlankStr, parse_optional_date, validate_email
from ..pricing.schemas import CargoItem, TimeBandSurcharge, WorkOption

QuoteStatus = Literal["pending", "quoted", "accepted", "declined"]


class QuoteRequestCreate(BaseModel):
    """Schema for a new quote request from the web form, a referral or the phone"""

    customer_last_name: NonBlankStr
    customer_first_name: NonBlankStr
    customer_last_name_kana: Optional[str] = None
    customer_first_name_kana: Optional[str] = None
    customer_email: NonBlankStr
    customer_phone: NonBlankStr

    from_postal_code: Optional[str] = None
    from_prefecture: NonBlankStr
    from_city: NonBlankStr
    from_address_line: NonBlankStr
    from_building_type: Optional[str] = None
    from_floor: Optional[int] = None
    from_has_elevator: Optional[bool] = None

    to_postal_code: Optional[str] = None
    to_prefecture: NonBlankStr
    to_city: NonBlankStr
    to_address_line: NonBlankStr
    to_building_type: Optional[str] = None
    to_floor: Optional[int] = None
    to_has_elevator: Optional[bool] = None

    preferred_date_1: Optional[date] = None
    preferred_time_slot_1: Optional[str] = None
    preferred_date_2: Optional[date] = None
    preferred_time_slot_2: Optional[str] = None
    preferred_date_3: Optional[date] = None
    preferred_time_slot_3: Optional[str] = None

    household_size: Optional[int] = Field(None, ge=1)
    estimated_volume_cbm: Optional[float] = Field(None, ge=0)
    packing_required: bool = False
    has_fragile_items: bool = False
    has_large_furniture: bool = False
    special_requirements: Optional[str] = None
    access_restrictions: Optional[str] = None
    distance_km: Optional[float] = Field(None, ge=0)
    estimated_duration_hours: Optional[float] = Field(None, ge=0)

    request_source: NonBlankStr
    referrer_agent_id: Optional[str] = None
    status: QuoteStatus = "pending"

    @field_validator("customer_email")
    @classmethod
    def normalize_email(cls, v):
        return validate_email(v)

    @field_validator("preferred_date_1", "preferred_date_2", "preferred_date_3", mode="before")
    @classmethod
    def parse_preferred_dates(cls, v):
        return parse_optional_date(v)


class QuoteRequestResponse(BaseModel):
    """Schema for quote request response"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    customer_last_name: str
    customer_first_name: str
    customer_last_name_kana: Optional[str] = None
    customer_first_name_kana: Optional[str] = None
    customer_email: str
    customer_phone: str
    from_postal_code: Optional[str] = None
    from_prefecture: str
    from_city: str
    from_address_line: str
    from_building_type: Optional[str] = None
    from_floor: Optional[int] = None
    from_has_elevator: Optional[bool] = None
    to_postal_code: Optional[str] = None
    to_prefecture: str
    to_city: str
    to_address_line: str
    to_building_type: Optional[str] = None
    to_floor: Optional[int] = None
    to_has_elevator: Optional[bool] = None
    preferred_date_1: Optional[date] = None
    preferred_time_slot_1: Optional[str] = None
    preferred_date_2: Optional[date] = None
    preferred_time_slot_2: Optional[str] = None
    preferred_date_3: Optional[date] = None
    preferred_time_slot_3: Optional[str] = None
    household_size: Optional[int] = None
    estimated_volume_cbm: Optional[float] = None
    packing_required: bool
    has_fragile_items: bool
    has_large_furniture: bool
    special_requirements: Optional[str] = None
    access_restrictions: Optional[str] = None
    distance_km: Optional[float] = None
    estimated_duration_hours: Optional[float] = None
    request_source: str
    referrer_agent_id: Optional[str] = None
    status: str
    estimate_truck_type: Optional[str] = None
    estimate_breakdown: Optional[dict[str, Any]] = None
    estimated_price: Optional[int] = None
    estimated_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EstimateAttach(BaseModel):
    """
    Estimate inputs for a stored request. distance and moveDate fall back to
    the request's distance_km and preferred_date_1 when omitted.
    """

    truckType: Optional[str] = None
    items: list[CargoItem] = []
    options: list[WorkOption] = []
    distance: Optional[float] = Field(None, ge=0)
    timeSurcharges: list[TimeBandSurcharge] = []
    taxRate: Optional[float] = Field(None, ge=0, le=1)
    moveDate: Optional[date] = None

    @field_validator("moveDate", mode="before")
    @classmethod
    def parse_move_date(cls, v):
        return parse_optional_date(v)
