from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from portal_api.models.payment import PaymentStatus
from portal_api.schemas.common import PartialUpdate, UUIDStr, WriteModel
from portal_api.schemas.customer import CustomerSummary
from portal_api.schemas.product import ProductSummary


def _check_currency(v):
    if v is None:
        return v
    if not v.isalpha():
        raise ValueError("currency must be a 3-letter code")
    return v.upper()


class PaymentCreate(WriteModel):
    customer_id: UUIDStr
    product_id: UUIDStr
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    currency: str = Field(default="MXN", min_length=3, max_length=3)
    method: str = Field(min_length=1, max_length=30)
    status: PaymentStatus = PaymentStatus.pending
    external_ref: Optional[str] = Field(default=None, max_length=100)
    paid_at: Optional[datetime] = None

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v):
        return _check_currency(v)


class PaymentUpdate(PartialUpdate):
    nullable_fields = ("external_ref", "paid_at")

    customer_id: Optional[UUIDStr] = None
    product_id: Optional[UUIDStr] = None
    amount: Optional[Decimal] = Field(default=None, gt=0, max_digits=12, decimal_places=2)
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    method: Optional[str] = Field(default=None, min_length=1, max_length=30)
    status: Optional[PaymentStatus] = None
    external_ref: Optional[str] = Field(default=None, max_length=100)
    paid_at: Optional[datetime] = None

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v):
        return _check_currency(v)


class PaymentSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    payment_id: str
    amount: Decimal
    currency: str
    status: PaymentStatus


class PaymentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    payment_id: str
    customer_id: str
    product_id: str
    amount: Decimal
    currency: str
    method: str
    status: PaymentStatus
    external_ref: Optional[str] = None
    paid_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    customer: Optional[CustomerSummary] = None
    product: Optional[ProductSummary] = None
