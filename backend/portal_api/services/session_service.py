import logging
from typing import List, Optional

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from portal_api.errors import CustomerNotFoundError
from portal_api.models.base import utcnow
from portal_api.models.customer import Customer
from portal_api.models.session import CustomerSession, SessionStatus
from portal_api.schemas.session import SessionCreate, SessionUpdate
from portal_api.services.common import apply_changes, delete_record, require_reference, save

logger = logging.getLogger(__name__)


def _stamp_ended_at(record: CustomerSession, changes: dict) -> None:
    """A session leaving the active state gets an end time unless one was given"""
    status = changes.get("status", record.status)
    if status != SessionStatus.active and "ended_at" not in changes and record.ended_at is None:
        changes["ended_at"] = utcnow()


def list_sessions(session: Session) -> List[CustomerSession]:
    query = (
        select(CustomerSession)
        .options(selectinload(CustomerSession.customer))
        .order_by(CustomerSession.started_at)
    )
    return session.exec(query).all()


def get_session_record(session: Session, session_id: str) -> Optional[CustomerSession]:
    query = (
        select(CustomerSession)
        .where(CustomerSession.session_id == session_id)
        .options(selectinload(CustomerSession.customer))
    )
    return session.exec(query).first()


def create_session_record(session: Session, payload: SessionCreate) -> CustomerSession:
    data = payload.model_dump()
    require_reference(session, Customer, data["customer_id"], CustomerNotFoundError)

    record = CustomerSession(**data)
    if record.status != SessionStatus.active and record.ended_at is None:
        record.ended_at = record.started_at

    save(session, record)
    logger.info("Opened session %s for customer %s", record.session_id, record.customer_id)
    return record


def update_session_record(session: Session, session_id: str, payload: SessionUpdate) -> Optional[CustomerSession]:
    record = session.get(CustomerSession, session_id)
    if record is None:
        return None

    changes = payload.model_dump(exclude_unset=True)
    if "customer_id" in changes:
        require_reference(session, Customer, changes["customer_id"], CustomerNotFoundError)
    if "status" in changes:
        _stamp_ended_at(record, changes)

    apply_changes(record, changes)
    save(session, record)
    logger.info("Updated session %s", session_id)
    return record


def delete_session_record(session: Session, session_id: str) -> int:
    record = session.get(CustomerSession, session_id)
    if record is None:
        return 0
    return delete_record(session, record)
