from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, SQLModel

from portal_api.models.base import gen_uuid, utcnow

if TYPE_CHECKING:
    from portal_api.models.customer import Customer
    from portal_api.models.payment import Payment


class Product(SQLModel, table=True):
    """A rentable product or service offered to a customer (``/api/services`` in older clients)"""

    product_id: str = Field(default_factory=gen_uuid, primary_key=True, max_length=36)
    customer_id: str = Field(foreign_key="customer.customer_id", index=True, max_length=36)
    name: str = Field(max_length=150)
    description: str = Field(max_length=255)
    min_monthly_rent: Optional[Decimal] = Field(default=None, max_digits=12, decimal_places=2)
    max_monthly_rent: Optional[Decimal] = Field(default=None, max_digits=12, decimal_places=2)
    active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    # Relationships
    customer: "Customer" = Relationship(back_populates="products")
    # Only settled payments are left by the time a product is deleted; pending ones block the delete
    payments: List["Payment"] = Relationship(back_populates="product", sa_relationship_kwargs={"cascade": "all, delete"})
