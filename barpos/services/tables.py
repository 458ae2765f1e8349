"""
Table registry: floor plan tables and their administrative status
"""

from typing import Any, List, Optional, Tuple
import uuid

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select
import structlog

from barpos.core.clock import utcnow
from barpos.core.exceptions import ConflictError, InvalidStateError, ValidationError
from barpos.models import Table, TableSession, TableStatus
from barpos.services.transactions import (
    current_session,
    load_table,
    serialized,
    table_transaction,
)

logger = structlog.get_logger(__name__)

# Lock key guarding table number allocation
CREATE_TABLE_KEY = "tables:create"


def parse_status(value: Any) -> TableStatus:
    if isinstance(value, TableStatus):
        return value
    try:
        return TableStatus(str(value).upper())
    except ValueError:
        raise ValidationError(
            f"Unknown table status {value!r}",
            allowed=", ".join(s.value for s in TableStatus),
        )


def list_tables(db: Session, include_disabled: bool = True) -> List[Table]:
    """All live tables ordered by number"""
    query = select(Table).where(Table.deleted_at.is_(None))
    if not include_disabled:
        query = query.where(Table.status != TableStatus.DISABLED)
    return list(db.exec(query.order_by(Table.number)).all())


def get_table(db: Session, table_id: uuid.UUID) -> Tuple[Table, Optional[TableSession]]:
    """Table plus its open session (with orders) when OCCUPIED"""
    table = load_table(db, table_id)
    session_obj = current_session(db, table) if table.status == TableStatus.OCCUPIED else None
    return table, session_obj


def create_table(db: Session, number: Any) -> Table:
    """Add a FREE table with a number unused by any live table"""
    if isinstance(number, bool) or not isinstance(number, int) or number <= 0:
        raise ValidationError("Table number must be a positive integer", number=number)

    try:
        with serialized(db, CREATE_TABLE_KEY):
            existing = db.exec(
                select(Table).where(Table.number == number, Table.deleted_at.is_(None))
            ).first()
            if existing:
                raise ConflictError(f"Table number {number} already exists", number=number)

            table = Table(number=number, status=TableStatus.FREE)
            db.add(table)
    except IntegrityError:
        # Another process inserted the same live number first
        raise ConflictError(f"Table number {number} already exists", number=number)

    db.refresh(table)
    logger.info("Table created", table_id=str(table.id), table_number=number)
    return table


def set_table_status(db: Session, table_id: uuid.UUID, new_status: Any) -> Table:
    """Manual FREE <-> DISABLED change"""
    status = parse_status(new_status)

    with table_transaction(db, table_id) as table:
        previous = table.status
        changed = table.set_admin_status(status)
        db.add(table)

    db.refresh(table)
    if changed:
        logger.info(
            "Table status changed",
            table_id=str(table_id),
            table_number=table.number,
            previous=previous.value,
            status=table.status.value,
        )
    return table


def delete_table(db: Session, table_id: uuid.UUID) -> None:
    """Soft delete a table that is not in service; its sessions stay in history"""
    with table_transaction(db, table_id) as table:
        if table.status == TableStatus.OCCUPIED:
            raise InvalidStateError(
                f"Table {table.number} is occupied, close it before deleting",
                table_id=table_id,
            )
        table.deleted_at = utcnow()
        table.updated_at = table.deleted_at
        db.add(table)

    logger.info("Table deleted", table_id=str(table_id))
