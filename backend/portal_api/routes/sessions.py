from typing import Any, Dict, List
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlmodel import Session

from portal_api.database import get_session
from portal_api.routes.common import parse_body
from portal_api.schemas.session import SessionCreate, SessionRead, SessionUpdate
from portal_api.services import session_service

router = APIRouter()


@router.get("", response_model=List[SessionRead])
def list_sessions(session: Session = Depends(get_session)):
    return session_service.list_sessions(session)


@router.get("/{session_id}", response_model=SessionRead)
def get_session_record(session_id: UUID, session: Session = Depends(get_session)):
    record = session_service.get_session_record(session, str(session_id))
    if not record:
        raise HTTPException(status_code=404, detail="Session not found")
    return record


@router.post("", response_model=SessionRead, status_code=201)
def create_session_record(session_data: SessionCreate, session: Session = Depends(get_session)):
    """Open a session for a customer. started_at is set by the server."""
    return session_service.create_session_record(session, session_data)


@router.put("/{session_id}", response_model=SessionRead)
def update_session_record(session_id: UUID, body: Dict[str, Any] = Body(...), session: Session = Depends(get_session)):
    if not session_service.get_session_record(session, str(session_id)):
        raise HTTPException(status_code=404, detail="Session not found")
    return session_service.update_session_record(session, str(session_id), parse_body(SessionUpdate, body))


@router.delete("/{session_id}", status_code=204)
def delete_session_record(session_id: UUID, session: Session = Depends(get_session)):
    if not session_service.delete_session_record(session, str(session_id)):
        raise HTTPException(status_code=404, detail="Session not found")
    return None
