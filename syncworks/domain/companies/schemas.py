"""Company schemas - Pydantic models for registration and profile updates"""

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from ...shared.validators import validate_email


def parse_staff_count(value) -> Optional[int]:
    """Staff count arrives as a number or a form string; unparsable input counts as 0"""
    if value is None or value == "":
        return None
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


class EmailData(BaseModel):
    businessEmail: Optional[str] = None

    @field_validator("businessEmail")
    @classmethod
    def check_email(cls, v):
        return validate_email(v) if v else v


class BasicInfo(BaseModel):
    emailData: Optional[EmailData] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    postalCode: Optional[str] = None


class MoverInfo(BaseModel):
    companyName: Optional[str] = None
    description: Optional[str] = None
    staffCount: Optional[Union[int, str]] = None


class ReferrerInfo(BaseModel):
    referrerType: Optional[str] = None  # individual, corporate
    displayName: Optional[str] = None
    companyName: Optional[str] = None
    department: Optional[str] = None
    fullName: Optional[str] = None
    kana: Optional[str] = None
    bankCode: Optional[str] = None
    branchName: Optional[str] = None
    accountNumber: Optional[str] = None
    accountHolder: Optional[str] = None


class RegistrationRequest(BaseModel):
    """Sign-up form for a moving company or a referrer"""

    userType: Literal["mover", "referrer"]
    basicInfo: Optional[BasicInfo] = None
    moverInfo: Optional[MoverInfo] = None
    referrerInfo: Optional[ReferrerInfo] = None


class CompanyUpdate(BaseModel):
    companyName: Optional[str] = None
    description: Optional[str] = None
    staffCount: Optional[Union[int, str]] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    postalCode: Optional[str] = None
    emailData: Optional[EmailData] = None


class CompanyUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    display_name: Optional[str] = None
    phone_number: Optional[str] = None


class CompanyResponse(BaseModel):
    """Schema for company response, with the owner's contact fields"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    company_name: str
    description: Optional[str] = None
    staff_count: int
    postal_code: Optional[str] = None
    address_line: Optional[str] = None
    phone_number: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: Optional[CompanyUser] = None
