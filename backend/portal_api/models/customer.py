from datetime import datetime
from typing import TYPE_CHECKING, List

from sqlmodel import Field, Relationship, SQLModel

from portal_api.models.base import gen_uuid, utcnow

if TYPE_CHECKING:
    from portal_api.models.payment import Payment
    from portal_api.models.product import Product
    from portal_api.models.session import CustomerSession
    from portal_api.models.verification import Verification

# Deleting a customer takes its dependent rows with it (pending payments block the delete first)
_CASCADE = {"cascade": "all, delete"}


class Customer(SQLModel, table=True):
    customer_id: str = Field(default_factory=gen_uuid, primary_key=True, max_length=36)
    name: str = Field(max_length=100)
    email: str = Field(max_length=100, unique=True, index=True)
    phone: str = Field(max_length=25)  # stored normalized: digits with optional leading +
    address: str = Field(max_length=100)
    active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    # Relationships
    products: List["Product"] = Relationship(back_populates="customer", sa_relationship_kwargs=_CASCADE)
    sessions: List["CustomerSession"] = Relationship(back_populates="customer", sa_relationship_kwargs=_CASCADE)
    payments: List["Payment"] = Relationship(back_populates="customer", sa_relationship_kwargs=_CASCADE)
    verifications: List["Verification"] = Relationship(back_populates="customer", sa_relationship_kwargs=_CASCADE)
