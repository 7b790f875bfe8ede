from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String
from sqlmodel import Column, Field, Relationship, SQLModel

from portal_api.models.base import gen_uuid, utcnow

if TYPE_CHECKING:
    from portal_api.models.customer import Customer
    from portal_api.models.product import Product
    from portal_api.models.verification import Verification


class PaymentStatus(str, Enum):
    pending = "pending"
    paid = "paid"
    failed = "failed"
    refunded = "refunded"


class Payment(SQLModel, table=True):
    payment_id: str = Field(default_factory=gen_uuid, primary_key=True, max_length=36)
    customer_id: str = Field(foreign_key="customer.customer_id", index=True, max_length=36)
    product_id: str = Field(foreign_key="product.product_id", index=True, max_length=36)
    amount: Decimal = Field(max_digits=12, decimal_places=2)
    currency: str = Field(default="MXN", max_length=3)
    method: str = Field(max_length=30)
    status: PaymentStatus = Field(default=PaymentStatus.pending, sa_column=Column(String(10), nullable=False, index=True))
    external_ref: Optional[str] = Field(default=None, max_length=100)
    paid_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    # Relationships
    customer: "Customer" = Relationship(back_populates="payments")
    product: "Product" = Relationship(back_populates="payments")
    verifications: List["Verification"] = Relationship(
        back_populates="payment", sa_relationship_kwargs={"cascade": "all, delete"}
    )
