"""
Helpers shared by the entity services.
"""

import logging
from typing import Any, Dict, Type, TypeVar

from sqlalchemy import inspect as sa_inspect
from sqlmodel import Session, SQLModel, select

from portal_api.errors import ReferenceNotFoundError
from portal_api.models.base import utcnow

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


def require_reference(
    session: Session, model: Type[ModelT], ref_id: str, error_cls: Type[ReferenceNotFoundError]
) -> ModelT:
    """Load a referenced row with a row lock, or raise ``error_cls``.

    The lock holds until the caller commits, so the row cannot be deleted
    between this check and the write that points at it. SQLite ignores
    ``FOR UPDATE``.
    """
    pk = sa_inspect(model).primary_key[0]
    row = session.exec(select(model).where(pk == ref_id).with_for_update()).first()
    if row is None:
        logger.warning("Reference check failed: %s %s does not exist", error_cls.entity, ref_id)
        raise error_cls(ref_id)
    return row


def apply_changes(record: SQLModel, changes: Dict[str, Any]) -> None:
    """Copy the fields present in ``changes`` onto ``record`` and bump updated_at"""
    for key, value in changes.items():
        setattr(record, key, value)
    record.updated_at = utcnow()


def save(session: Session, record: ModelT) -> ModelT:
    session.add(record)
    session.commit()
    session.refresh(record)
    return record


def delete_record(session: Session, record: SQLModel) -> int:
    session.delete(record)
    session.commit()
    return 1
