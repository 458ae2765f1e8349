"""
Tables API endpoints: floor plan, status and session open/close
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel import Session
from typing import List
import uuid

from barpos.core.database import get_session
from barpos.api.schemas import (
    SessionRead, TableCreate, TableDetailRead, TableRead, TableStatusUpdate
)
from barpos.services import sessions as ledger
from barpos.services import tables as registry
from barpos.services.invoices import Invoice

router = APIRouter()


@router.get("/", response_model=List[TableRead])
def list_tables(
    include_disabled: bool = Query(True, description="Set false for the service floor plan"),
    session: Session = Depends(get_session)
):
    """List tables of any status, ordered by number"""
    return [TableRead.from_model(t) for t in registry.list_tables(session, include_disabled)]


@router.post("/", response_model=TableRead, status_code=status.HTTP_201_CREATED)
def create_table(
    table_data: TableCreate,
    session: Session = Depends(get_session)
):
    """Create a new FREE table"""
    return TableRead.from_model(registry.create_table(session, table_data.number))


@router.get("/{table_id}", response_model=TableDetailRead)
def get_table(
    table_id: uuid.UUID,
    session: Session = Depends(get_session)
):
    """Get table with its current session, orders and items"""
    table, current = registry.get_table(session, table_id)
    return TableDetailRead.from_models(table, current)


@router.put("/{table_id}/status", response_model=TableRead)
def update_table_status(
    table_id: uuid.UUID,
    status_data: TableStatusUpdate,
    session: Session = Depends(get_session)
):
    """Enable or disable a table"""
    return TableRead.from_model(registry.set_table_status(session, table_id, status_data.status))


@router.delete("/{table_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_table(
    table_id: uuid.UUID,
    session: Session = Depends(get_session)
):
    """Remove a table from the floor plan"""
    registry.delete_table(session, table_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{table_id}/open", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
def open_table(
    table_id: uuid.UUID,
    session: Session = Depends(get_session)
):
    """Open a session on a FREE table"""
    return SessionRead.from_model(ledger.open_session(session, table_id))


@router.post("/{table_id}/close", response_model=Invoice)
def close_table(
    table_id: uuid.UUID,
    session: Session = Depends(get_session)
):
    """Close the table's session and return the invoice data"""
    return ledger.close_session(session, table_id)
