"""
Per-table transaction boundary

Every lifecycle mutation of a table runs inside table_transaction: the table's
lock is held for the whole read-check-write-commit sequence and any failure
rolls the unit of work back, so a table and its session never end up half
updated.
"""

from contextlib import contextmanager
from typing import Hashable, Iterator, Optional
import uuid

from sqlmodel import Session, select

from barpos.core.exceptions import not_found
from barpos.core.locks import get_table_locks
from barpos.models import Table, TableSession


def load_table(db: Session, table_id: uuid.UUID, for_update: bool = False) -> Table:
    """Fetch a live (non-deleted) table or raise NotFoundError"""
    query = select(Table).where(Table.id == table_id, Table.deleted_at.is_(None))
    if for_update:
        query = query.with_for_update()
    table = db.exec(query).first()
    if not table:
        raise not_found("Table", table_id)
    return table


def current_session(db: Session, table: Table) -> Optional[TableSession]:
    """Session referenced by the table's lookup key, if any"""
    if table.current_session_id is None:
        return None
    return db.get(TableSession, table.current_session_id)


@contextmanager
def serialized(db: Session, key: Hashable) -> Iterator[None]:
    """Hold the lock for key around one unit of work, committing on success"""
    with get_table_locks().hold(key):
        db.expire_all()
        try:
            yield
            db.commit()
        except Exception:
            db.rollback()
            raise


@contextmanager
def table_transaction(db: Session, table_id: uuid.UUID) -> Iterator[Table]:
    """Lock a table, re-read it and yield it for mutation"""
    with serialized(db, table_id):
        yield load_table(db, table_id, for_update=True)
