from typing import Any, Dict, List
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlmodel import Session

from portal_api.database import get_session
from portal_api.routes.common import parse_body
from portal_api.schemas.payment import PaymentCreate, PaymentRead, PaymentUpdate
from portal_api.services import payment_service

router = APIRouter()


@router.get("", response_model=List[PaymentRead])
def list_payments(session: Session = Depends(get_session)):
    """List all payments with customer and product"""
    return payment_service.list_payments(session)


@router.get("/{payment_id}", response_model=PaymentRead)
def get_payment(payment_id: UUID, session: Session = Depends(get_session)):
    payment = payment_service.get_payment(session, str(payment_id))
    if not payment:
        raise HTTPException(status_code=404, detail="Payment not found")
    return payment


@router.post("", response_model=PaymentRead, status_code=201)
def create_payment(payment_data: PaymentCreate, session: Session = Depends(get_session)):
    """
    Record a payment.

    customer_id and product_id must exist (checked in that order).
    amount is returned as a decimal string, e.g. "1500.00".
    """
    return payment_service.create_payment(session, payment_data)


@router.put("/{payment_id}", response_model=PaymentRead)
def update_payment(payment_id: UUID, body: Dict[str, Any] = Body(...), session: Session = Depends(get_session)):
    """Partial update; moving to 'paid' stamps paid_at if the body does not set it"""
    if not payment_service.get_payment(session, str(payment_id)):
        raise HTTPException(status_code=404, detail="Payment not found")
    return payment_service.update_payment(session, str(payment_id), parse_body(PaymentUpdate, body))


@router.delete("/{payment_id}", status_code=204)
def delete_payment(payment_id: UUID, session: Session = Depends(get_session)):
    if not payment_service.delete_payment(session, str(payment_id)):
        raise HTTPException(status_code=404, detail="Payment not found")
    return None
