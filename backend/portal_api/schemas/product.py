from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from portal_api.schemas.common import PartialUpdate, UUIDStr, WriteModel
from portal_api.schemas.customer import CustomerSummary


def check_rent_range(min_rent: Optional[Decimal], max_rent: Optional[Decimal]) -> None:
    if min_rent is not None and max_rent is not None and max_rent < min_rent:
        raise ValueError("max_monthly_rent must be greater than or equal to min_monthly_rent")


class ProductCreate(WriteModel):
    customer_id: UUIDStr
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=255)
    min_monthly_rent: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    max_monthly_rent: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    active: bool = True

    @model_validator(mode="after")
    def validate_rent_range(self):
        check_rent_range(self.min_monthly_rent, self.max_monthly_rent)
        return self


class ProductUpdate(PartialUpdate):
    nullable_fields = ("min_monthly_rent", "max_monthly_rent")

    customer_id: Optional[UUIDStr] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, min_length=1, max_length=255)
    min_monthly_rent: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    max_monthly_rent: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    active: Optional[bool] = None

    @model_validator(mode="after")
    def validate_rent_range(self):
        # Only the payload is known here; the service re-checks against the stored record
        check_rent_range(self.min_monthly_rent, self.max_monthly_rent)
        return self


class ProductSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: str
    name: str


class ProductRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: str
    customer_id: str
    name: str
    description: str
    min_monthly_rent: Optional[Decimal] = None
    max_monthly_rent: Optional[Decimal] = None
    active: bool
    created_at: datetime
    updated_at: datetime
    customer: Optional[CustomerSummary] = None
