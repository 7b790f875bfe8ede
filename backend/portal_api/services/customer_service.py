"""
Customer business rules: phone normalization, unique email, and the
pending-payment guard on delete.
"""

import logging
import re
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, func, select

from portal_api.errors import CustomerHasActivePaymentsError, EmailInUseError
from portal_api.models.customer import Customer
from portal_api.models.payment import Payment, PaymentStatus
from portal_api.schemas.customer import CustomerCreate, CustomerUpdate
from portal_api.services.common import apply_changes, delete_record, save

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")


def normalize_phone(raw: str) -> str:
    """Keep only digits, plus a leading '+' if there was one.

    "55 1234-5678" -> "5512345678"
    "+52 (55) 1234-5678" -> "+525512345678"
    """
    if not raw:
        return raw
    trimmed = raw.strip()
    digits = _NON_DIGITS.sub("", trimmed)
    if trimmed.startswith("+"):
        return f"+{digits}"
    return digits


def _find_by_email(session: Session, email: str) -> Optional[Customer]:
    return session.exec(select(Customer).where(Customer.email == email)).first()


def list_customers(session: Session) -> List[Customer]:
    return session.exec(select(Customer).order_by(Customer.created_at)).all()


def get_customer(session: Session, customer_id: str) -> Optional[Customer]:
    return session.get(Customer, customer_id)


def create_customer(session: Session, payload: CustomerCreate) -> Customer:
    data = payload.model_dump()
    if _find_by_email(session, data["email"]) is not None:
        logger.warning("Customer create rejected: email %s already in use", data["email"])
        raise EmailInUseError(data["email"])

    data["phone"] = normalize_phone(data["phone"])
    customer = Customer(**data)
    try:
        save(session, customer)
    except IntegrityError:
        # Lost a race with a concurrent insert of the same email
        session.rollback()
        raise EmailInUseError(data["email"])

    logger.info("Created customer %s", customer.customer_id)
    return customer


def update_customer(session: Session, customer_id: str, payload: CustomerUpdate) -> Optional[Customer]:
    """Apply a partial update. Returns None when the customer does not exist."""
    customer = session.get(Customer, customer_id)
    if customer is None:
        return None

    changes = payload.model_dump(exclude_unset=True)

    email = changes.get("email")
    if email is not None and email != customer.email:
        owner = _find_by_email(session, email)
        if owner is not None and owner.customer_id != customer.customer_id:
            logger.warning("Customer %s update rejected: email %s already in use", customer_id, email)
            raise EmailInUseError(email)

    if "phone" in changes:
        changes["phone"] = normalize_phone(changes["phone"])

    apply_changes(customer, changes)
    try:
        save(session, customer)
    except IntegrityError:
        session.rollback()
        if "email" not in changes:
            raise
        raise EmailInUseError(email)

    logger.info("Updated customer %s (%s)", customer_id, ", ".join(sorted(changes)) or "no fields")
    return customer


def count_pending_payments(session: Session, customer_id: str) -> int:
    query = (
        select(func.count())
        .select_from(Payment)
        .where(Payment.customer_id == customer_id, Payment.status == PaymentStatus.pending.value)
    )
    return session.exec(query).one()


def delete_customer(session: Session, customer_id: str) -> int:
    """
    Delete a customer and its dependent records.

    Returns the number of customers deleted (0 if it did not exist).
    Raises CustomerHasActivePaymentsError while any payment is still pending.
    """
    customer = session.get(Customer, customer_id)
    if customer is None:
        return 0

    pending = count_pending_payments(session, customer_id)
    if pending > 0:
        logger.warning("Customer %s delete blocked: %d pending payment(s)", customer_id, pending)
        raise CustomerHasActivePaymentsError(customer_id, pending)

    deleted = delete_record(session, customer)
    logger.info("Deleted customer %s", customer_id)
    return deleted
