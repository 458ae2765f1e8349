"""
Order item model
Single product line with the price captured when it was ordered
"""

from sqlmodel import Field, SQLModel, Relationship
from decimal import Decimal
from typing import Optional, TYPE_CHECKING
import uuid

if TYPE_CHECKING:
    from barpos.models.order import Order
    from barpos.models.product import Product


class OrderItem(SQLModel, table=True):
    """Line item of an order"""

    __tablename__ = "order_items"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    order_id: uuid.UUID = Field(
        foreign_key="orders.id",
        index=True,
        description="Order this item belongs to"
    )
    product_id: uuid.UUID = Field(
        foreign_key="products.id",
        index=True,
        description="Product ordered"
    )

    # Snapshots taken from the product at order time
    product_name: str = Field(max_length=255, description="Product name at time of order")
    price_at_order: Decimal = Field(
        max_digits=10,
        decimal_places=2,
        description="Unit price at time of order, never re-read from the product"
    )
    quantity: int = Field(default=1, description="Quantity ordered")

    position: int = Field(default=0, description="Display order within the order")

    # Relationships
    order: Optional["Order"] = Relationship(back_populates="items")
    product: Optional["Product"] = Relationship()

    @property
    def line_total(self) -> Decimal:
        return self.price_at_order * self.quantity
