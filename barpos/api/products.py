"""
Products API endpoints
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel import Session
from typing import List
import uuid

from barpos.core.database import get_session
from barpos.api.schemas import ProductCreate, ProductRead, ProductUpdate
from barpos.services import products as catalog

router = APIRouter()


@router.get("/", response_model=List[ProductRead])
def list_products(
    include_inactive: bool = Query(False),
    session: Session = Depends(get_session)
):
    """List products available for ordering"""
    return [ProductRead.from_model(p) for p in catalog.list_products(session, include_inactive)]


@router.get("/categories", response_model=List[str])
def list_categories(session: Session = Depends(get_session)):
    """Categories for the product form"""
    return catalog.list_categories(session)


@router.post("/", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product(
    product_data: ProductCreate,
    session: Session = Depends(get_session)
):
    product = catalog.create_product(
        session,
        name=product_data.name,
        price=product_data.price,
        category=product_data.category,
    )
    return ProductRead.from_model(product)


@router.patch("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: uuid.UUID,
    product_data: ProductUpdate,
    session: Session = Depends(get_session)
):
    """Update price, name, category or availability"""
    product = catalog.update_product(session, product_id, **product_data.model_dump(exclude_unset=True))
    return ProductRead.from_model(product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session)
):
    catalog.delete_product(session, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
