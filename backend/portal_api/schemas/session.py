from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from portal_api.models.session import SessionStatus
from portal_api.schemas.common import PartialUpdate, UUIDStr, WriteModel
from portal_api.schemas.customer import CustomerSummary


class SessionCreate(WriteModel):
    customer_id: UUIDStr
    user_agent: str = Field(min_length=1, max_length=255)
    status: SessionStatus = SessionStatus.active
    ended_at: Optional[datetime] = None


class SessionUpdate(PartialUpdate):
    nullable_fields = ("ended_at",)

    customer_id: Optional[UUIDStr] = None
    user_agent: Optional[str] = Field(default=None, min_length=1, max_length=255)
    status: Optional[SessionStatus] = None
    ended_at: Optional[datetime] = None


class SessionSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    session_id: str
    status: SessionStatus
    started_at: datetime


class SessionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    session_id: str
    customer_id: str
    user_agent: str
    status: SessionStatus
    started_at: datetime
    ended_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    customer: Optional[CustomerSummary] = None
