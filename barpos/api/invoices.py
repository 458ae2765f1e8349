"""
Invoice and sales history API endpoints
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlmodel import Session
from typing import List, Optional
import uuid

from barpos.core.config import get_settings
from barpos.core.database import get_session
from barpos.services import sessions as ledger
from barpos.services.invoices import Invoice, get_invoice
from barpos.services.receipts import format_invoice_text
from barpos.services.reporting import InvoiceSummary, get_invoice_summary
from barpos.services.sessions import ClosedSessionSummary

router = APIRouter()
settings = get_settings()


@router.get("/", response_model=InvoiceSummary)
def invoice_summary(session: Session = Depends(get_session)):
    """Total sales, invoice count, average ticket and closed sessions"""
    return get_invoice_summary(session)


@router.get("/sessions", response_model=List[ClosedSessionSummary])
def closed_sessions(
    table_id: Optional[uuid.UUID] = None,
    session: Session = Depends(get_session)
):
    """Closed session history, newest first"""
    return ledger.list_closed_sessions(session, table_id)


@router.get("/{session_id}", response_model=Invoice)
def invoice_detail(
    session_id: uuid.UUID,
    session: Session = Depends(get_session)
):
    return get_invoice(session, session_id)


@router.get("/{session_id}/receipt", response_class=PlainTextResponse)
def invoice_receipt(
    session_id: uuid.UUID,
    session: Session = Depends(get_session)
):
    """Printable text receipt"""
    invoice = get_invoice(session, session_id)
    return format_invoice_text(invoice, width=settings.RECEIPT_WIDTH, currency=settings.CURRENCY_SYMBOL)
