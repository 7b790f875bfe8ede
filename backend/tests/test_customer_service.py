"""
Service-level tests for the customer rules, run directly against a Session.
"""

from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from portal_api.errors import CustomerHasActivePaymentsError, EmailInUseError, ErrorKind
from portal_api.schemas.customer import CustomerCreate, CustomerUpdate
from portal_api.schemas.payment import PaymentCreate
from portal_api.schemas.product import ProductCreate
from portal_api.services import customer_service, payment_service, product_service
from portal_api.services.customer_service import normalize_phone


def _create(session: Session, email="ana@example.com"):
    return customer_service.create_customer(
        session, CustomerCreate(name="Ana", email=email, phone="55 1234-5678", address="Centro")
    )


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("55 1234-5678", "5512345678"),
        ("+52 (55) 1234-5678", "+525512345678"),
        ("  +1 555.010.9999 ", "+15550109999"),
        ("", ""),
    ],
)
def test_normalize_phone(raw, expected):
    assert normalize_phone(raw) == expected


def test_create_stores_normalized_phone_and_lowercase_email(session: Session):
    customer = _create(session, email="Ana.Perez@Example.com")

    assert customer.phone == "5512345678"
    assert customer.email == "ana.perez@example.com"
    assert customer.active is True


def test_create_duplicate_email_raises(session: Session):
    _create(session)

    with pytest.raises(EmailInUseError) as exc_info:
        _create(session)

    assert exc_info.value.kind == ErrorKind.email_in_use
    assert exc_info.value.status_code == 409


def test_update_missing_returns_none(session: Session):
    assert customer_service.update_customer(session, "nope", CustomerUpdate(name="x")) is None


def test_update_only_touches_sent_fields(session: Session):
    customer = _create(session)
    before = customer.updated_at

    updated = customer_service.update_customer(session, customer.customer_id, CustomerUpdate(address="Norte 5"))

    assert updated.address == "Norte 5"
    assert updated.name == "Ana"
    assert updated.phone == "5512345678"
    assert updated.updated_at >= before


def test_delete_returns_affected_count(session: Session):
    customer = _create(session)

    assert customer_service.delete_customer(session, customer.customer_id) == 1
    assert customer_service.delete_customer(session, customer.customer_id) == 0
    assert customer_service.get_customer(session, customer.customer_id) is None


def test_delete_with_pending_payment_raises(session: Session):
    customer = _create(session)
    product = product_service.create_product(
        session, ProductCreate(customer_id=customer.customer_id, name="Local", description="Unit")
    )
    payment_service.create_payment(
        session,
        PaymentCreate(
            customer_id=customer.customer_id, product_id=product.product_id, amount=Decimal("99.90"), method="cash"
        ),
    )

    assert customer_service.count_pending_payments(session, customer.customer_id) == 1
    with pytest.raises(CustomerHasActivePaymentsError) as exc_info:
        customer_service.delete_customer(session, customer.customer_id)

    assert exc_info.value.pending_count == 1
    assert customer_service.get_customer(session, customer.customer_id) is not None


def _failing_save(session, record):
    raise IntegrityError("UPDATE customer", {}, Exception("constraint failed"))


def test_update_integrity_error_without_email_is_not_email_in_use(session: Session, monkeypatch):
    customer = _create(session)
    monkeypatch.setattr(customer_service, "save", _failing_save)

    with pytest.raises(IntegrityError):
        customer_service.update_customer(session, customer.customer_id, CustomerUpdate(name="Ana María"))


def test_update_integrity_error_on_email_change_is_email_in_use(session: Session, monkeypatch):
    customer = _create(session)
    monkeypatch.setattr(customer_service, "save", _failing_save)

    with pytest.raises(EmailInUseError) as exc_info:
        customer_service.update_customer(session, customer.customer_id, CustomerUpdate(email="new@example.com"))

    assert exc_info.value.email == "new@example.com"
