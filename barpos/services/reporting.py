"""
Sales reporting over closed sessions
"""

from decimal import Decimal
from typing import List

from sqlmodel import SQLModel, Session
import structlog

from barpos.services.sessions import ClosedSessionSummary, list_closed_sessions

logger = structlog.get_logger(__name__)

ZERO = Decimal("0.00")
CENTS = Decimal("0.01")


class InvoiceSummary(SQLModel):
    total_sales: Decimal
    total_sessions: int
    average_ticket: Decimal
    sessions: List[ClosedSessionSummary]


def get_invoice_summary(db: Session) -> InvoiceSummary:
    """Totals, count and average ticket, with sessions newest first"""
    sessions = list_closed_sessions(db)
    total_sales = sum((s.total_amount for s in sessions), ZERO)
    count = len(sessions)
    average = (total_sales / count).quantize(CENTS) if count else ZERO

    logger.debug("Invoice summary computed", total_sessions=count, total_sales=str(total_sales))
    return InvoiceSummary(
        total_sales=total_sales,
        total_sessions=count,
        average_ticket=average,
        sessions=sessions,
    )
