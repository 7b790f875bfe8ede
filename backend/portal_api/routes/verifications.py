"""
Verification API Routes
"""

from typing import Any, Dict, List
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlmodel import Session

from portal_api.database import get_session
from portal_api.routes.common import parse_body
from portal_api.schemas.verification import VerificationCreate, VerificationRead, VerificationUpdate
from portal_api.services import verification_service

router = APIRouter()


@router.get("", response_model=List[VerificationRead])
def list_verifications(session: Session = Depends(get_session)):
    """List verifications, newest first, with customer, session and payment"""
    return verification_service.list_verifications(session)


@router.get("/{verification_id}", response_model=VerificationRead)
def get_verification(verification_id: UUID, session: Session = Depends(get_session)):
    verification = verification_service.get_verification(session, str(verification_id))
    if not verification:
        raise HTTPException(status_code=404, detail="Verification not found")
    return verification


@router.post("", response_model=VerificationRead, status_code=201)
def create_verification(verification_data: VerificationCreate, session: Session = Depends(get_session)):
    """
    Create a verification.

    References are checked in order customer_id, session_id, payment_id; the
    first one missing is reported (400 customer-not-found / session-not-found /
    payment-not-found). expires_at defaults to now + VERIFICATION_TTL_MINUTES.
    """
    return verification_service.create_verification(session, verification_data)


@router.put("/{verification_id}", response_model=VerificationRead)
def update_verification(
    verification_id: UUID, body: Dict[str, Any] = Body(...), session: Session = Depends(get_session)
):
    if not verification_service.get_verification(session, str(verification_id)):
        raise HTTPException(status_code=404, detail="Verification not found")
    verification_data = parse_body(VerificationUpdate, body)
    return verification_service.update_verification(session, str(verification_id), verification_data)


@router.delete("/{verification_id}", status_code=204)
def delete_verification(verification_id: UUID, session: Session = Depends(get_session)):
    if not verification_service.delete_verification(session, str(verification_id)):
        raise HTTPException(status_code=404, detail="Verification not found")
    return None
