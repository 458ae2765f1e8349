"""
Order intake: append product lines to the open session of a table
"""

from decimal import Decimal
from typing import Dict, Sequence
import uuid

from sqlmodel import SQLModel, Session
import structlog

from barpos.core.exceptions import InvalidStateError, NotFoundError, ValidationError
from barpos.models import Order, OrderItem, Product, TableStatus
from barpos.services.transactions import current_session, table_transaction

logger = structlog.get_logger(__name__)


class OrderItemCreate(SQLModel):
    product_id: uuid.UUID
    quantity: int = 1


class AddItemsResult(SQLModel):
    session_id: uuid.UUID
    order_id: uuid.UUID
    item_count: int
    total_amount: Decimal


def _validate_items(items: Sequence[OrderItemCreate]) -> None:
    if not items:
        raise ValidationError("At least one item is required")
    for index, entry in enumerate(items):
        quantity = entry.quantity
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError(
                "Quantity must be a positive integer",
                index=index,
                product_id=entry.product_id,
                quantity=quantity,
            )


def _resolve_products(db: Session, items: Sequence[OrderItemCreate]) -> Dict[uuid.UUID, Product]:
    products: Dict[uuid.UUID, Product] = {}
    for entry in items:
        if entry.product_id in products:
            continue
        product = db.get(Product, entry.product_id)
        if not product or not product.is_active:
            raise NotFoundError("Product not found or not available", product_id=entry.product_id)
        products[entry.product_id] = product
    return products


def add_items(db: Session, table_id: uuid.UUID, items: Sequence[OrderItemCreate]) -> AddItemsResult:
    """Record one order batch against the table's open session"""
    _validate_items(items)

    with table_transaction(db, table_id) as table:
        if table.status != TableStatus.OCCUPIED:
            raise InvalidStateError(
                f"Table {table.number} is {table.status.value}, open it before ordering",
                table_id=table_id,
                status=table.status.value,
            )
        session_obj = current_session(db, table)
        if session_obj is None or not session_obj.is_open:
            raise InvalidStateError(f"Table {table.number} has no open session", table_id=table_id)

        products = _resolve_products(db, items)

        order = Order(session_id=session_obj.id)
        for position, entry in enumerate(items):
            product = products[entry.product_id]
            order.items.append(
                OrderItem(
                    product_id=product.id,
                    product_name=product.name,
                    price_at_order=product.price,
                    quantity=entry.quantity,
                    position=position,
                )
            )
        session_obj.append_order(order)
        db.add(session_obj)

        # Total as of this batch, before another terminal can append
        result = AddItemsResult(
            session_id=session_obj.id,
            order_id=order.id,
            item_count=len(items),
            total_amount=session_obj.compute_total(),
        )

    logger.info(
        "Order added",
        table_id=str(table_id),
        session_id=str(result.session_id),
        order_id=str(result.order_id),
        item_count=result.item_count,
        total_amount=str(result.total_amount),
    )
    return result
