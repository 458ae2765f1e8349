"""
Product model for the menu catalog
"""

from sqlmodel import Field, SQLModel
from decimal import Decimal
from datetime import datetime
from typing import Optional
from enum import Enum
import uuid

from barpos.core.clock import utcnow


class ProductCategory(str, Enum):
    """Categories offered by the menu screen; any other text is accepted too"""
    DRINKS = "Bebidas"
    FOOD = "Comidas"
    DESSERTS = "Postres"


class Product(SQLModel, table=True):
    """Purchasable menu product"""

    __tablename__ = "products"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    name: str = Field(max_length=255, nullable=False, description="Product name")
    price: Decimal = Field(
        default=Decimal("0.00"),
        max_digits=10,
        decimal_places=2,
        description="Current price; order lines keep their own snapshot"
    )
    category: str = Field(max_length=100, index=True, description="Menu category")

    is_active: bool = Field(default=True, index=True, description="Inactive products cannot be ordered")

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
