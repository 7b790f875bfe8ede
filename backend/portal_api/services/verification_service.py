"""
Verification records tie a customer, one of its sessions and a payment
together. All three references are checked before anything is written.
"""

import logging
from datetime import timedelta
from typing import List, Optional

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from portal_api import config
from portal_api.errors import CustomerNotFoundError, PaymentNotFoundError, SessionNotFoundError
from portal_api.models.base import utcnow
from portal_api.models.customer import Customer
from portal_api.models.payment import Payment
from portal_api.models.session import CustomerSession
from portal_api.models.verification import Verification, VerificationStatus
from portal_api.schemas.verification import VerificationCreate, VerificationUpdate
from portal_api.services.common import apply_changes, delete_record, require_reference, save

logger = logging.getLogger(__name__)

# Checked in this order; the first missing reference decides the error kind
_REFERENCES = (
    ("customer_id", Customer, CustomerNotFoundError),
    ("session_id", CustomerSession, SessionNotFoundError),
    ("payment_id", Payment, PaymentNotFoundError),
)


def _with_relations(query):
    return query.options(
        selectinload(Verification.customer),
        selectinload(Verification.session),
        selectinload(Verification.payment),
    )


def _check_references(session: Session, data: dict) -> None:
    for field, model, error_cls in _REFERENCES:
        if field in data:
            require_reference(session, model, data[field], error_cls)


def list_verifications(session: Session) -> List[Verification]:
    """All verifications, newest first"""
    query = _with_relations(select(Verification)).order_by(Verification.created_at.desc())
    return session.exec(query).all()


def get_verification(session: Session, verification_id: str) -> Optional[Verification]:
    query = _with_relations(select(Verification).where(Verification.verification_id == verification_id))
    return session.exec(query).first()


def create_verification(session: Session, payload: VerificationCreate) -> Verification:
    data = payload.model_dump()
    _check_references(session, data)

    verification = Verification(**data)
    if verification.expires_at is None:
        verification.expires_at = verification.created_at + timedelta(minutes=config.VERIFICATION_TTL_MINUTES)
    if verification.status == VerificationStatus.approved:
        verification.verified_at = verification.created_at

    save(session, verification)
    logger.info(
        "Created %s verification %s for customer %s",
        verification.type,
        verification.verification_id,
        verification.customer_id,
    )
    return verification


def update_verification(
    session: Session, verification_id: str, payload: VerificationUpdate
) -> Optional[Verification]:
    verification = session.get(Verification, verification_id)
    if verification is None:
        return None

    changes = payload.model_dump(exclude_unset=True)
    _check_references(session, changes)

    if (
        changes.get("status") == VerificationStatus.approved
        and "verified_at" not in changes
        and verification.verified_at is None
    ):
        changes["verified_at"] = utcnow()

    apply_changes(verification, changes)
    save(session, verification)
    logger.info("Updated verification %s", verification_id)
    return verification


def delete_verification(session: Session, verification_id: str) -> int:
    verification = session.get(Verification, verification_id)
    if verification is None:
        return 0
    return delete_record(session, verification)
