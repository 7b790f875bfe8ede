"""
Product API Routes
Also served under /api/services for clients written against the older naming.
"""

from typing import Any, Dict, List
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlmodel import Session

from portal_api.database import get_session
from portal_api.routes.common import parse_body
from portal_api.schemas.product import ProductCreate, ProductRead, ProductUpdate
from portal_api.services import product_service

router = APIRouter()


@router.get("", response_model=List[ProductRead])
def list_products(session: Session = Depends(get_session)):
    """List all products with their owning customer"""
    return product_service.list_products(session)


@router.get("/{product_id}", response_model=ProductRead)
def get_product(product_id: UUID, session: Session = Depends(get_session)):
    product = product_service.get_product(session, str(product_id))
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("", response_model=ProductRead, status_code=201)
def create_product(product_data: ProductCreate, session: Session = Depends(get_session)):
    """Create a product for an existing customer (400 customer-not-found otherwise)"""
    return product_service.create_product(session, product_data)


@router.put("/{product_id}", response_model=ProductRead)
def update_product(product_id: UUID, body: Dict[str, Any] = Body(...), session: Session = Depends(get_session)):
    if not product_service.get_product(session, str(product_id)):
        raise HTTPException(status_code=404, detail="Product not found")
    return product_service.update_product(session, str(product_id), parse_body(ProductUpdate, body))


@router.delete("/{product_id}", status_code=204)
def delete_product(product_id: UUID, session: Session = Depends(get_session)):
    """Delete a product; 409 while any of its payments is still pending"""
    if not product_service.delete_product(session, str(product_id)):
        raise HTTPException(status_code=404, detail="Product not found")
    return None
