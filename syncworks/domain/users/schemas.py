"""User schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ...shared.validators import validate_email

UserRole = Literal["system_admin", "company_admin", "referrer", "employee"]


class UserCreate(BaseModel):
    """Schema for creating a user; send either a plain password or a ready hash"""

    email: str
    password: Optional[str] = None
    password_hash: Optional[str] = None
    role: UserRole
    display_name: Optional[str] = None
    phone_number: Optional[str] = None
    is_active: bool = True
    email_verified: bool = False
    email_verified_at: Optional[datetime] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @model_validator(mode="after")
    def require_password(self):
        if not self.password and not self.password_hash:
            raise ValueError("Missing required field: password")
        return self


class UserUpdate(BaseModel):
    """Partial update; only fields present in the body are written"""

    email: Optional[str] = None
    password: Optional[str] = None
    password_hash: Optional[str] = None
    role: Optional[UserRole] = None
    display_name: Optional[str] = None
    phone_number: Optional[str] = None
    is_active: Optional[bool] = None
    email_verified: Optional[bool] = None
    email_verified_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v) if v else v


class UserResponse(BaseModel):
    """Public user fields; the password hash is never exposed"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    role: str
    display_name: Optional[str] = None
    phone_number: Optional[str] = None
    is_active: bool
    email_verified: bool
    email_verified_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
