"""
Order intake API endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlmodel import Session
import uuid

from barpos.core.database import get_session
from barpos.api.schemas import AddItemsRequest
from barpos.services import orders as intake
from barpos.services.orders import AddItemsResult

router = APIRouter()


@router.post("/table/{table_id}", response_model=AddItemsResult, status_code=status.HTTP_201_CREATED)
def add_items(
    table_id: uuid.UUID,
    order_data: AddItemsRequest,
    session: Session = Depends(get_session)
):
    """Add a batch of items to the table's open session"""
    return intake.add_items(session, table_id, order_data.items)
