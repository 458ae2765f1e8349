"""
Session ledger: opening and closing table sessions

State per table: FREE -> OCCUPIED (session open, orders accruing) -> FREE
(session closed, invoice emitted). Both transitions run under the table's lock
so two terminals can never open the same table twice, and an add-items call
can never land on a session that is being closed.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
import uuid

from sqlmodel import SQLModel, Session, select
import structlog

from barpos.core.exceptions import InvalidStateError, not_found
from barpos.models import Table, TableSession, TableStatus
from barpos.services.invoices import Invoice, build_invoice
from barpos.services.transactions import current_session, table_transaction

logger = structlog.get_logger(__name__)


class ClosedSessionSummary(SQLModel):
    """Closed session with its table's number joined in at query time"""
    id: uuid.UUID
    table_id: uuid.UUID
    table_number: int
    start_time: datetime
    end_time: datetime
    total_amount: Decimal


def open_session(db: Session, table_id: uuid.UUID) -> TableSession:
    """Open a session on a FREE table"""
    with table_transaction(db, table_id) as table:
        session_obj = TableSession(table_id=table.id)
        table.occupy(session_obj.id)
        db.add(session_obj)
        db.add(table)

    db.refresh(session_obj)
    logger.info(
        "Table session opened",
        table_id=str(table_id),
        table_number=table.number,
        session_id=str(session_obj.id),
    )
    return session_obj


def close_session(db: Session, table_id: uuid.UUID) -> Invoice:
    """Close the open session of an OCCUPIED table and return its invoice"""
    with table_transaction(db, table_id) as table:
        if table.status != TableStatus.OCCUPIED:
            raise InvalidStateError(
                f"Table {table.number} is {table.status.value}, only OCCUPIED tables can be closed",
                table_id=table_id,
                status=table.status.value,
            )
        session_obj = current_session(db, table)
        if session_obj is None or not session_obj.is_open:
            raise InvalidStateError(
                f"Table {table.number} has no open session",
                table_id=table_id,
            )

        session_obj.finalize()
        table.release()
        db.add(session_obj)
        db.add(table)

    invoice = build_invoice(session_obj, table.number)
    logger.info(
        "Table session closed",
        table_id=str(table_id),
        table_number=table.number,
        session_id=str(session_obj.id),
        total_amount=str(invoice.total_amount),
        line_count=len(invoice.lines),
    )
    return invoice


def get_session(db: Session, session_id: uuid.UUID) -> TableSession:
    session_obj = db.get(TableSession, session_id)
    if not session_obj:
        raise not_found("Session", session_id)
    return session_obj


def list_closed_sessions(db: Session, table_id: Optional[uuid.UUID] = None) -> List[ClosedSessionSummary]:
    """Closed sessions, most recently closed first"""
    query = (
        select(TableSession, Table.number)
        .join(Table, TableSession.table_id == Table.id)
        .where(TableSession.end_time.is_not(None))
    )
    if table_id:
        query = query.where(TableSession.table_id == table_id)
    query = query.order_by(TableSession.end_time.desc())

    return [
        ClosedSessionSummary(
            id=session_obj.id,
            table_id=session_obj.table_id,
            table_number=number,
            start_time=session_obj.start_time,
            end_time=session_obj.end_time,
            total_amount=session_obj.total_amount,
        )
        for session_obj, number in db.exec(query).all()
    ]
