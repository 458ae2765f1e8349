"""
Invoice projection of a closed session

An invoice is what the external renderer (PDF, printer) needs: the table
number, each line with the product name, quantity and price captured at order
time, the frozen total and the session timestamps.
"""

from sqlmodel import SQLModel, Session
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
import uuid

from barpos.core.exceptions import InvalidStateError, not_found
from barpos.models import Table, TableSession


class InvoiceLine(SQLModel):
    product_id: uuid.UUID
    product_name: str
    quantity: int
    price_at_order: Decimal
    line_total: Decimal


class Invoice(SQLModel):
    session_id: uuid.UUID
    table_id: uuid.UUID
    table_number: int
    start_time: datetime
    end_time: Optional[datetime] = None
    lines: List[InvoiceLine]
    total_amount: Decimal


def build_invoice(session_obj: TableSession, table_number: int) -> Invoice:
    """Flatten a session's orders into invoice lines"""
    lines = [
        InvoiceLine(
            product_id=item.product_id,
            product_name=item.product_name,
            quantity=item.quantity,
            price_at_order=item.price_at_order,
            line_total=item.line_total,
        )
        for order in session_obj.orders
        for item in order.items
    ]
    return Invoice(
        session_id=session_obj.id,
        table_id=session_obj.table_id,
        table_number=table_number,
        start_time=session_obj.start_time,
        end_time=session_obj.end_time,
        lines=lines,
        total_amount=session_obj.current_total,
    )


def get_invoice(db: Session, session_id: uuid.UUID) -> Invoice:
    """Invoice of a closed session"""
    session_obj = db.get(TableSession, session_id)
    if not session_obj:
        raise not_found("Session", session_id)
    if session_obj.is_open:
        raise InvalidStateError("Session is still open, close the table first", session_id=session_id)

    table = db.get(Table, session_obj.table_id)
    return build_invoice(session_obj, table.number)
