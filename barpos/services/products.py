"""
Product catalog
"""

from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional
import uuid

from sqlmodel import Session, select
import structlog

from barpos.core.clock import utcnow
from barpos.core.exceptions import ValidationError, not_found
from barpos.models import Product, ProductCategory

logger = structlog.get_logger(__name__)

CENTS = Decimal("0.01")


def parse_price(value: Any) -> Decimal:
    """Coerce a price to a non-negative two-place Decimal"""
    if isinstance(value, bool):
        raise ValidationError("Price must be a number", price=value)
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError("Price must be a number", price=value)
    if not price.is_finite() or price < 0:
        raise ValidationError("Price must be a non-negative amount", price=value)
    return price.quantize(CENTS)


def _required_text(value: Optional[str], field: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field.capitalize()} is required", field=field)
    return text


def list_products(db: Session, include_inactive: bool = False) -> List[Product]:
    query = select(Product)
    if not include_inactive:
        query = query.where(Product.is_active == True)  # noqa: E712
    query = query.order_by(Product.category, Product.name)
    return list(db.exec(query).all())


def get_product(db: Session, product_id: uuid.UUID) -> Product:
    product = db.get(Product, product_id)
    if not product:
        raise not_found("Product", product_id)
    return product


def create_product(db: Session, name: str, price: Any, category: str) -> Product:
    """Add a product to the catalog"""
    product = Product(
        name=_required_text(name, "name"),
        price=parse_price(price),
        category=_required_text(category, "category"),
        is_active=True,
    )
    db.add(product)
    db.commit()
    db.refresh(product)

    logger.info("Product created", product_id=str(product.id), name=product.name, price=str(product.price))
    return product


def update_product(
    db: Session,
    product_id: uuid.UUID,
    name: Optional[str] = None,
    price: Any = None,
    category: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> Product:
    """Update a product; order lines already placed keep their snapshot"""
    product = get_product(db, product_id)

    if name is not None:
        product.name = _required_text(name, "name")
    if price is not None:
        product.price = parse_price(price)
    if category is not None:
        product.category = _required_text(category, "category")
    if is_active is not None:
        product.is_active = is_active
    product.updated_at = utcnow()

    db.add(product)
    db.commit()
    db.refresh(product)

    logger.info("Product updated", product_id=str(product_id))
    return product


def delete_product(db: Session, product_id: uuid.UUID) -> None:
    """Remove a product from the menu; past order lines still reference it"""
    product = get_product(db, product_id)
    product.is_active = False
    product.updated_at = utcnow()
    db.add(product)
    db.commit()

    logger.info("Product deactivated", product_id=str(product_id))


def list_categories(db: Session) -> List[str]:
    """Known menu categories followed by any free-text ones already in use"""
    known = [category.value for category in ProductCategory]
    in_use = db.exec(select(Product.category).distinct().order_by(Product.category)).all()
    return known + [category for category in in_use if category not in known]
