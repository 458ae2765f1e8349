"""
API schemas for tables, sessions, orders and products
"""

from sqlmodel import SQLModel
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
import uuid

from barpos.models import Order, OrderItem, Product, Table, TableSession, TableStatus
from barpos.services.orders import OrderItemCreate

# ============================================================================
# Product Schemas
# ============================================================================

class ProductCreate(SQLModel):
    name: str
    price: Decimal
    category: str


class ProductUpdate(SQLModel):
    name: Optional[str] = None
    price: Optional[Decimal] = None
    category: Optional[str] = None
    is_active: Optional[bool] = None


class ProductRead(SQLModel):
    id: uuid.UUID
    name: str
    price: Decimal
    category: str
    is_active: bool

    @classmethod
    def from_model(cls, product: Product) -> "ProductRead":
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            category=product.category,
            is_active=product.is_active,
        )


# ============================================================================
# Session Schemas
# ============================================================================

class OrderItemRead(SQLModel):
    id: uuid.UUID
    product_id: uuid.UUID
    product_name: str
    quantity: int
    price_at_order: Decimal
    line_total: Decimal

    @classmethod
    def from_model(cls, item: OrderItem) -> "OrderItemRead":
        return cls(
            id=item.id,
            product_id=item.product_id,
            product_name=item.product_name,
            quantity=item.quantity,
            price_at_order=item.price_at_order,
            line_total=item.line_total,
        )


class OrderRead(SQLModel):
    id: uuid.UUID
    sequence: int
    created_at: datetime
    items: List[OrderItemRead]

    @classmethod
    def from_model(cls, order: Order) -> "OrderRead":
        return cls(
            id=order.id,
            sequence=order.sequence,
            created_at=order.created_at,
            items=[OrderItemRead.from_model(item) for item in order.items],
        )


class SessionRead(SQLModel):
    id: uuid.UUID
    table_id: uuid.UUID
    start_time: datetime
    end_time: Optional[datetime] = None
    is_open: bool
    total_amount: Decimal
    orders: List[OrderRead]

    @classmethod
    def from_model(cls, session_obj: TableSession) -> "SessionRead":
        return cls(
            id=session_obj.id,
            table_id=session_obj.table_id,
            start_time=session_obj.start_time,
            end_time=session_obj.end_time,
            is_open=session_obj.is_open,
            total_amount=session_obj.current_total,
            orders=[OrderRead.from_model(order) for order in session_obj.orders],
        )


# ============================================================================
# Table Schemas
# ============================================================================

class TableCreate(SQLModel):
    number: int


class TableStatusUpdate(SQLModel):
    status: TableStatus


class TableRead(SQLModel):
    id: uuid.UUID
    number: int
    status: TableStatus
    current_session_id: Optional[uuid.UUID] = None
    version: int

    @classmethod
    def from_model(cls, table: Table) -> "TableRead":
        return cls(
            id=table.id,
            number=table.number,
            status=table.status,
            current_session_id=table.current_session_id,
            version=table.version,
        )


class TableDetailRead(TableRead):
    current_session: Optional[SessionRead] = None

    @classmethod
    def from_models(cls, table: Table, session_obj: Optional[TableSession]) -> "TableDetailRead":
        return cls(
            **TableRead.from_model(table).model_dump(),
            current_session=SessionRead.from_model(session_obj) if session_obj else None,
        )


# ============================================================================
# Order Intake Schemas
# ============================================================================

class AddItemsRequest(SQLModel):
    items: List[OrderItemCreate]
