"""
Customer API Routes
CRUD for customers. Email must be unique; customers with pending payments cannot be deleted.
"""

from typing import Any, Dict, List
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlmodel import Session

from portal_api.database import get_session
from portal_api.routes.common import parse_body
from portal_api.schemas.customer import CustomerCreate, CustomerRead, CustomerUpdate
from portal_api.services import customer_service

router = APIRouter()


@router.get("", response_model=List[CustomerRead])
def list_customers(session: Session = Depends(get_session)):
    """List all customers"""
    return customer_service.list_customers(session)


@router.get("/{customer_id}", response_model=CustomerRead)
def get_customer(customer_id: UUID, session: Session = Depends(get_session)):
    """Get a customer by ID"""
    customer = customer_service.get_customer(session, str(customer_id))
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.post("", response_model=CustomerRead, status_code=201)
def create_customer(customer_data: CustomerCreate, session: Session = Depends(get_session)):
    """
    Create a customer.

    The phone number is normalized to digits (keeping a leading '+').
    Responds 409 when the email already belongs to another customer.
    """
    return customer_service.create_customer(session, customer_data)


@router.put("/{customer_id}", response_model=CustomerRead)
def update_customer(customer_id: UUID, body: Dict[str, Any] = Body(...), session: Session = Depends(get_session)):
    """
    Update only the fields present in the body.

    An unknown id answers 404 before the body is validated.
    """
    if not customer_service.get_customer(session, str(customer_id)):
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer_service.update_customer(session, str(customer_id), parse_body(CustomerUpdate, body))


@router.delete("/{customer_id}", status_code=204)
def delete_customer(customer_id: UUID, session: Session = Depends(get_session)):
    """
    Delete a customer together with its products, sessions, payments and verifications.

    Responds 409 while the customer has any payment in 'pending' status.
    """
    if not customer_service.delete_customer(session, str(customer_id)):
        raise HTTPException(status_code=404, detail="Customer not found")
    return None
