"""
Order model: one batch of items submitted together during a session
"""

from sqlmodel import Field, SQLModel, Relationship
from datetime import datetime
from decimal import Decimal
from typing import Optional, TYPE_CHECKING, List
import uuid

from barpos.core.clock import utcnow

if TYPE_CHECKING:
    from barpos.models.table_session import TableSession
    from barpos.models.order_item import OrderItem


class Order(SQLModel, table=True):
    """Append-only order batch"""

    __tablename__ = "orders"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    session_id: uuid.UUID = Field(
        foreign_key="table_sessions.id",
        index=True,
        description="Session this order belongs to"
    )
    sequence: int = Field(default=1, description="Position of this order within its session")
    created_at: datetime = Field(default_factory=utcnow)

    # Relationships
    session: Optional["TableSession"] = Relationship(back_populates="orders")
    items: List["OrderItem"] = Relationship(
        back_populates="order",
        sa_relationship_kwargs={"order_by": "OrderItem.position", "cascade": "all, delete-orphan"}
    )

    @property
    def subtotal(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0.00"))
