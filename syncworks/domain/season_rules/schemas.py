"""Season rule schemas - Pydantic models for validation"""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ...shared.validators import NonBlankStr, parse_date_string

PriceType = Literal["percentage", "fixed"]
RecurringType = Literal["none", "weekly", "monthly", "yearly", "specific"]


class RecurringPattern(BaseModel):
    """Details for recurring rules"""

    weekdays: Optional[list[int]] = None  # 0=Sunday ... 6=Saturday
    monthlyPattern: Optional[Literal["date", "weekday"]] = None
    specificDates: Optional[list[str]] = None

    @field_validator("weekdays")
    @classmethod
    def validate_weekdays(cls, v):
        if v is not None and any(d < 0 or d > 6 for d in v):
            raise ValueError("weekdays must be between 0 (Sunday) and 6 (Saturday)")
        return v

    @field_validator("specificDates")
    @classmethod
    def normalize_specific_dates(cls, v):
        if v is None:
            return v
        return [parse_date_string(d).isoformat() for d in v]


class SeasonRuleInput(BaseModel):
    """A season rule as submitted by the pricing screen"""

    id: Optional[str] = None
    name: NonBlankStr
    startDate: date
    endDate: date
    priceType: PriceType = "percentage"
    price: float = 0
    description: Optional[str] = None
    isRecurring: bool = False
    recurringType: RecurringType = "none"
    recurringPattern: Optional[RecurringPattern] = None
    recurringEndYear: Optional[int] = None

    @field_validator("startDate", "endDate", mode="before")
    @classmethod
    def parse_dates(cls, v):
        return parse_date_string(v)

    @model_validator(mode="after")
    def check_fixed_price(self):
        if self.priceType == "fixed" and not float(self.price).is_integer():
            raise ValueError("Fixed season prices must be whole yen")
        return self


class SeasonRuleBulkSave(BaseModel):
    seasonRules: list[SeasonRuleInput]


class SeasonRuleOut(BaseModel):
    """Season rule as returned by the API and kept in cache"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    startDate: date
    endDate: date
    priceType: PriceType
    price: float
    description: str = ""
    isRecurring: bool
    recurringType: RecurringType
    recurringPattern: Optional[RecurringPattern] = None
    recurringEndYear: Optional[int] = None
    priority: int = 0


class AdjustmentDetail(BaseModel):
    name: str
    adjustment: int


class SeasonAdjustment(BaseModel):
    total: int
    details: list[AdjustmentDetail]
