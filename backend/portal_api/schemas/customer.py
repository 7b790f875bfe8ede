from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from portal_api.schemas.common import PartialUpdate, WriteModel

EMAIL_MAX_LENGTH = 100


def _check_email(v):
    if v is None:
        return v
    if len(v) > EMAIL_MAX_LENGTH:
        raise ValueError(f"email must be at most {EMAIL_MAX_LENGTH} characters")
    return v.lower()


def _check_phone(v):
    if v is not None and not any(c.isdigit() for c in v):
        raise ValueError("phone must contain digits")
    return v


class CustomerCreate(WriteModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=20)
    address: str = Field(min_length=1, max_length=100)
    active: bool = True

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return _check_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return _check_phone(v)


class CustomerUpdate(PartialUpdate):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, min_length=1, max_length=20)
    address: Optional[str] = Field(default=None, min_length=1, max_length=100)
    active: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return _check_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return _check_phone(v)


class CustomerRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    customer_id: str
    name: str
    email: str
    phone: str
    address: str
    active: bool
    created_at: datetime
    updated_at: datetime


class CustomerSummary(BaseModel):
    """Embedded in records that belong to a customer"""

    model_config = ConfigDict(from_attributes=True)

    customer_id: str
    name: str
    email: str
