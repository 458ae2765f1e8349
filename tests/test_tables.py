"""
Unit tests for the table registry
"""

import pytest
from decimal import Decimal
import uuid

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from barpos.core.exceptions import (
    ConflictError, InvalidStateError, InvalidTransitionError, NotFoundError, ValidationError
)
from barpos.models import Table, TableStatus
from barpos.services import orders as intake
from barpos.services import sessions as ledger
from barpos.services import tables as registry
from barpos.services.orders import OrderItemCreate


def test_create_table_is_free(db: Session):
    table = registry.create_table(db, 5)

    assert table.number == 5
    assert table.status == TableStatus.FREE
    assert table.current_session_id is None


@pytest.mark.parametrize("number", [0, -3, "7", True, 2.0])
def test_create_table_rejects_bad_number(db: Session, number):
    with pytest.raises(ValidationError):
        registry.create_table(db, number)


def test_duplicate_number_conflicts(db: Session, table_five):
    with pytest.raises(ConflictError, match="already exists"):
        registry.create_table(db, 5)


def test_deleted_number_can_be_reused(db: Session, table_five):
    registry.delete_table(db, table_five.id)

    table = registry.create_table(db, 5)

    assert table.id != table_five.id
    assert [t.id for t in registry.list_tables(db)] == [table.id]


def test_list_tables_ordered_by_number(db: Session):
    for number in (3, 1, 2):
        registry.create_table(db, number)

    assert [t.number for t in registry.list_tables(db)] == [1, 2, 3]


def test_list_tables_returns_every_status(db: Session, table_five):
    registry.create_table(db, 6)
    registry.set_table_status(db, table_five.id, TableStatus.DISABLED)

    assert len(registry.list_tables(db)) == 2
    assert [t.number for t in registry.list_tables(db, include_disabled=False)] == [6]


def test_disable_free_table(db: Session, table_five):
    table = registry.set_table_status(db, table_five.id, "disabled")

    assert table.status == TableStatus.DISABLED
    assert table.current_session_id is None


def test_disable_occupied_table_fails(db: Session, table_five):
    ledger.open_session(db, table_five.id)

    with pytest.raises(InvalidTransitionError):
        registry.set_table_status(db, table_five.id, TableStatus.DISABLED)

    table, current = registry.get_table(db, table_five.id)
    assert table.status == TableStatus.OCCUPIED
    assert current is not None


def test_free_occupied_table_by_hand_fails(db: Session, table_five, coffee):
    opened = ledger.open_session(db, table_five.id)
    intake.add_items(db, table_five.id, [OrderItemCreate(product_id=coffee.id, quantity=2)])

    with pytest.raises(InvalidTransitionError):
        registry.set_table_status(db, table_five.id, TableStatus.FREE)

    table, current = registry.get_table(db, table_five.id)
    assert table.status == TableStatus.OCCUPIED
    assert table.current_session_id == opened.id
    assert current.is_open
    with pytest.raises(InvalidStateError):
        ledger.open_session(db, table_five.id)

    invoice = ledger.close_session(db, table_five.id)
    assert invoice.session_id == opened.id
    assert invoice.total_amount == Decimal("6.00")


def test_set_occupied_directly_fails(db: Session, table_five):
    with pytest.raises(InvalidTransitionError):
        registry.set_table_status(db, table_five.id, TableStatus.OCCUPIED)


def test_unknown_status_is_validation_error(db: Session, table_five):
    with pytest.raises(ValidationError):
        registry.set_table_status(db, table_five.id, "broken")


def test_get_unknown_table(db: Session):
    with pytest.raises(NotFoundError):
        registry.get_table(db, uuid.uuid4())


def test_get_free_table_has_no_session(db: Session, table_five):
    table, current = registry.get_table(db, table_five.id)

    assert table.number == 5
    assert current is None


def test_cannot_delete_occupied_table(db: Session, table_five):
    ledger.open_session(db, table_five.id)

    with pytest.raises(InvalidStateError):
        registry.delete_table(db, table_five.id)


def test_deleted_table_is_not_found(db: Session, table_five):
    registry.delete_table(db, table_five.id)

    with pytest.raises(NotFoundError):
        registry.get_table(db, table_five.id)


def test_live_number_is_unique_in_the_schema(db: Session, table_five):
    db.add(Table(number=5))

    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_number_taken_by_another_process_conflicts(db: Session, table_five, monkeypatch):
    # The pre-insert lookup misses, as when another worker inserted concurrently
    real_select = registry.select
    monkeypatch.setattr(registry, "select", lambda model: real_select(model).where(model.number < 0))

    with pytest.raises(ConflictError, match="already exists"):
        registry.create_table(db, 5)

    monkeypatch.undo()
    assert [t.id for t in registry.list_tables(db)] == [table_five.id]
