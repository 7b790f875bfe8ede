from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from portal_api.models.verification import VerificationStatus
from portal_api.schemas.common import PartialUpdate, UUIDStr, WriteModel
from portal_api.schemas.customer import CustomerSummary
from portal_api.schemas.payment import PaymentSummary
from portal_api.schemas.session import SessionSummary


class VerificationCreate(WriteModel):
    customer_id: UUIDStr
    session_id: UUIDStr
    payment_id: UUIDStr
    type: str = Field(min_length=1, max_length=30)
    status: VerificationStatus = VerificationStatus.pending
    attempts: int = Field(default=0, ge=0)
    expires_at: Optional[datetime] = None  # defaults to now + VERIFICATION_TTL_MINUTES


class VerificationUpdate(PartialUpdate):
    nullable_fields = ("expires_at", "verified_at")

    customer_id: Optional[UUIDStr] = None
    session_id: Optional[UUIDStr] = None
    payment_id: Optional[UUIDStr] = None
    type: Optional[str] = Field(default=None, min_length=1, max_length=30)
    status: Optional[VerificationStatus] = None
    attempts: Optional[int] = Field(default=None, ge=0)
    expires_at: Optional[datetime] = None
    verified_at: Optional[datetime] = None


class VerificationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    verification_id: str
    customer_id: str
    session_id: str
    payment_id: str
    type: str
    status: VerificationStatus
    attempts: int
    expires_at: Optional[datetime] = None
    verified_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    customer: Optional[CustomerSummary] = None
    session: Optional[SessionSummary] = None
    payment: Optional[PaymentSummary] = None
