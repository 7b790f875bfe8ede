from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String
from sqlmodel import Column, Field, Relationship, SQLModel

from portal_api.models.base import gen_uuid, utcnow

if TYPE_CHECKING:
    from portal_api.models.customer import Customer
    from portal_api.models.payment import Payment
    from portal_api.models.session import CustomerSession


class VerificationStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    expired = "expired"


class Verification(SQLModel, table=True):
    verification_id: str = Field(default_factory=gen_uuid, primary_key=True, max_length=36)
    customer_id: str = Field(foreign_key="customer.customer_id", index=True, max_length=36)
    session_id: str = Field(foreign_key="session.session_id", index=True, max_length=36)
    payment_id: str = Field(foreign_key="payment.payment_id", index=True, max_length=36)
    type: str = Field(max_length=30)  # e.g. "email", "sms", "identity"
    status: VerificationStatus = Field(
        default=VerificationStatus.pending, sa_column=Column(String(10), nullable=False)
    )
    attempts: int = Field(default=0)
    expires_at: Optional[datetime] = Field(default=None)
    verified_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)

    # Relationships
    customer: "Customer" = Relationship(back_populates="verifications")
    session: "CustomerSession" = Relationship(back_populates="verifications")
    payment: "Payment" = Relationship(back_populates="verifications")
