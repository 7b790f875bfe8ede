import logging
from typing import List, Optional

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from portal_api.errors import CustomerNotFoundError, ProductNotFoundError
from portal_api.models.base import utcnow
from portal_api.models.customer import Customer
from portal_api.models.payment import Payment, PaymentStatus
from portal_api.models.product import Product
from portal_api.schemas.payment import PaymentCreate, PaymentUpdate
from portal_api.services.common import apply_changes, delete_record, require_reference, save

logger = logging.getLogger(__name__)


def _with_relations(query):
    return query.options(selectinload(Payment.customer), selectinload(Payment.product))


def _check_references(session: Session, data: dict) -> None:
    # customer first, then product: the first missing reference decides the error
    if "customer_id" in data:
        require_reference(session, Customer, data["customer_id"], CustomerNotFoundError)
    if "product_id" in data:
        require_reference(session, Product, data["product_id"], ProductNotFoundError)


def list_payments(session: Session) -> List[Payment]:
    return session.exec(_with_relations(select(Payment)).order_by(Payment.created_at)).all()


def get_payment(session: Session, payment_id: str) -> Optional[Payment]:
    return session.exec(_with_relations(select(Payment).where(Payment.payment_id == payment_id))).first()


def create_payment(session: Session, payload: PaymentCreate) -> Payment:
    data = payload.model_dump()
    _check_references(session, data)

    payment = Payment(**data)
    if payment.status == PaymentStatus.paid and payment.paid_at is None:
        payment.paid_at = utcnow()

    save(session, payment)
    logger.info(
        "Created payment %s (%s %s) for customer %s",
        payment.payment_id,
        payment.amount,
        payment.currency,
        payment.customer_id,
    )
    return payment


def update_payment(session: Session, payment_id: str, payload: PaymentUpdate) -> Optional[Payment]:
    payment = session.get(Payment, payment_id)
    if payment is None:
        return None

    changes = payload.model_dump(exclude_unset=True)
    _check_references(session, changes)

    if changes.get("status") == PaymentStatus.paid and "paid_at" not in changes and payment.paid_at is None:
        changes["paid_at"] = utcnow()

    apply_changes(payment, changes)
    save(session, payment)
    logger.info("Updated payment %s", payment_id)
    return payment


def delete_payment(session: Session, payment_id: str) -> int:
    payment = session.get(Payment, payment_id)
    if payment is None:
        return 0
    return delete_record(session, payment)
