import logging
from typing import List, Optional

from sqlalchemy.orm import selectinload
from sqlmodel import Session, func, select

from portal_api.errors import CustomerNotFoundError, InvalidRecordError, ProductHasActivePaymentsError
from portal_api.models.customer import Customer
from portal_api.models.payment import Payment, PaymentStatus
from portal_api.models.product import Product
from portal_api.schemas.product import ProductCreate, ProductUpdate, check_rent_range
from portal_api.services.common import apply_changes, delete_record, require_reference, save

logger = logging.getLogger(__name__)


def list_products(session: Session) -> List[Product]:
    query = select(Product).options(selectinload(Product.customer)).order_by(Product.created_at)
    return session.exec(query).all()


def get_product(session: Session, product_id: str) -> Optional[Product]:
    query = select(Product).where(Product.product_id == product_id).options(selectinload(Product.customer))
    return session.exec(query).first()


def create_product(session: Session, payload: ProductCreate) -> Product:
    data = payload.model_dump()
    require_reference(session, Customer, data["customer_id"], CustomerNotFoundError)

    product = save(session, Product(**data))
    logger.info("Created product %s for customer %s", product.product_id, product.customer_id)
    return product


def update_product(session: Session, product_id: str, payload: ProductUpdate) -> Optional[Product]:
    product = session.get(Product, product_id)
    if product is None:
        return None

    changes = payload.model_dump(exclude_unset=True)
    if "customer_id" in changes:
        require_reference(session, Customer, changes["customer_id"], CustomerNotFoundError)

    try:
        check_rent_range(
            changes.get("min_monthly_rent", product.min_monthly_rent),
            changes.get("max_monthly_rent", product.max_monthly_rent),
        )
    except ValueError as e:
        raise InvalidRecordError(str(e))

    apply_changes(product, changes)
    save(session, product)
    logger.info("Updated product %s", product_id)
    return product


def count_pending_payments(session: Session, product_id: str) -> int:
    query = (
        select(func.count())
        .select_from(Payment)
        .where(Payment.product_id == product_id, Payment.status == PaymentStatus.pending.value)
    )
    return session.exec(query).one()


def delete_product(session: Session, product_id: str) -> int:
    """
    Delete a product and its settled payments.

    Pending payments block the delete, the same way they block deleting the customer.
    """
    product = session.get(Product, product_id)
    if product is None:
        return 0

    pending = count_pending_payments(session, product_id)
    if pending > 0:
        logger.warning("Product %s delete blocked: %d pending payment(s)", product_id, pending)
        raise ProductHasActivePaymentsError(product_id, pending)

    deleted = delete_record(session, product)
    logger.info("Deleted product %s", product_id)
    return deleted
