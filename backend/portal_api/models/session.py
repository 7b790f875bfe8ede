from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import String
from sqlmodel import Column, Field, Relationship, SQLModel

from portal_api.models.base import gen_uuid, utcnow

if TYPE_CHECKING:
    from portal_api.models.customer import Customer
    from portal_api.models.verification import Verification


class SessionStatus(str, Enum):
    active = "active"
    ended = "ended"
    revoked = "revoked"


class CustomerSession(SQLModel, table=True):
    """A customer's login session. Named to stay clear of ``sqlmodel.Session``."""

    __tablename__ = "session"

    session_id: str = Field(default_factory=gen_uuid, primary_key=True, max_length=36)
    customer_id: str = Field(foreign_key="customer.customer_id", index=True, max_length=36)
    user_agent: str = Field(max_length=255)
    status: SessionStatus = Field(default=SessionStatus.active, sa_column=Column(String(10), nullable=False))
    started_at: datetime = Field(default_factory=utcnow)
    ended_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    # Relationships
    customer: "Customer" = Relationship(back_populates="sessions")
    verifications: List["Verification"] = Relationship(
        back_populates="session", sa_relationship_kwargs={"cascade": "all, delete"}
    )
