"""
Table sessions API endpoints
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session
import uuid

from barpos.core.database import get_session
from barpos.api.schemas import SessionRead
from barpos.services import sessions as ledger

router = APIRouter()


@router.get("/{session_id}", response_model=SessionRead)
def get_table_session(
    session_id: uuid.UUID,
    session: Session = Depends(get_session)
):
    """Get a session, open or closed, with its orders"""
    return SessionRead.from_model(ledger.get_session(session, session_id))
