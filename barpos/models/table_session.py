"""
Table session model: one continuous occupancy of a table
"""

from sqlmodel import Field, SQLModel, Relationship
from datetime import datetime
from decimal import Decimal
from typing import Optional, TYPE_CHECKING, List
import uuid

from barpos.core.clock import utcnow
from barpos.core.exceptions import InvalidStateError

if TYPE_CHECKING:
    from barpos.models.table import Table
    from barpos.models.order import Order

ZERO = Decimal("0.00")


class TableSession(SQLModel, table=True):
    """Occupancy of a table from open to close, aggregating its orders"""

    __tablename__ = "table_sessions"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    table_id: uuid.UUID = Field(
        foreign_key="tables.id",
        index=True,
        description="Table this session occupied"
    )

    start_time: datetime = Field(default_factory=utcnow, index=True)
    end_time: Optional[datetime] = Field(
        default=None,
        index=True,
        description="Set when the session is closed; the session is frozen afterwards"
    )

    # Frozen on close; while open the total is derived from the line items
    total_amount: Decimal = Field(
        default=ZERO,
        max_digits=12,
        decimal_places=2,
        description="Final total written at close"
    )

    # Relationships
    table: Optional["Table"] = Relationship(back_populates="sessions")
    orders: List["Order"] = Relationship(
        back_populates="session",
        sa_relationship_kwargs={"order_by": "Order.sequence", "cascade": "all, delete-orphan"}
    )

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    def compute_total(self) -> Decimal:
        """Sum of price_at_order * quantity over every item of every order"""
        return sum((order.subtotal for order in self.orders), ZERO)

    @property
    def current_total(self) -> Decimal:
        """Running total while open, frozen total once closed"""
        if self.is_open:
            return self.compute_total()
        return self.total_amount

    def append_order(self, order: "Order") -> None:
        """Attach a new order batch; closed sessions are immutable"""
        if not self.is_open:
            raise InvalidStateError("Session is closed", session_id=self.id)
        order.sequence = len(self.orders) + 1
        self.orders.append(order)

    def finalize(self) -> None:
        """Freeze the total and stamp the end time"""
        if not self.is_open:
            raise InvalidStateError("Session is already closed", session_id=self.id)
        self.total_amount = self.compute_total()
        self.end_time = utcnow()
