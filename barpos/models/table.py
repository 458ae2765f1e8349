"""
Table model and its status state machine
"""

from sqlalchemy import Index, text
from sqlmodel import Field, SQLModel, Relationship
from datetime import datetime
from typing import Optional, TYPE_CHECKING, List
from enum import Enum
import uuid

from barpos.core.clock import utcnow
from barpos.core.exceptions import InvalidStateError, InvalidTransitionError

if TYPE_CHECKING:
    from barpos.models.table_session import TableSession


class TableStatus(str, Enum):
    """Status of a table on the floor plan"""
    FREE = "FREE"               # No session, can be opened
    OCCUPIED = "OCCUPIED"       # Session open, orders accruing
    DISABLED = "DISABLED"       # Taken out of service by a manager

    def can_transition_to(self, new_status: "TableStatus") -> bool:
        """Check whether the state machine allows moving to new_status"""
        return new_status in TABLE_TRANSITIONS[self]


TABLE_TRANSITIONS = {
    TableStatus.FREE: {TableStatus.OCCUPIED, TableStatus.DISABLED},
    TableStatus.OCCUPIED: {TableStatus.FREE},
    TableStatus.DISABLED: {TableStatus.FREE},
}

# Statuses a manager may set by hand; OCCUPIED only comes from opening a session
ADMIN_STATUSES = {TableStatus.FREE, TableStatus.DISABLED}

# Manual moves; an OCCUPIED table only leaves through closing its session
ADMIN_TRANSITIONS = {
    TableStatus.FREE: {TableStatus.DISABLED},
    TableStatus.OCCUPIED: set(),
    TableStatus.DISABLED: {TableStatus.FREE},
}


class Table(SQLModel, table=True):
    """Physical table on the floor plan"""

    __tablename__ = "tables"

    __table_args__ = (
        Index(
            "uq_tables_live_number",
            "number",
            unique=True,
            sqlite_where=text("deleted_at IS NULL"),
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    number: int = Field(index=True, description="Number shown on the floor plan, unique among live tables")

    status: TableStatus = Field(default=TableStatus.FREE, index=True)

    # Lookup key only, no foreign key: history lives in table_sessions
    current_session_id: Optional[uuid.UUID] = Field(
        default=None,
        nullable=True,
        description="Open session, set iff status is OCCUPIED"
    )

    version: int = Field(default=1, description="Bumped on every status change")

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = Field(default=None, index=True)

    # Relationships
    sessions: List["TableSession"] = Relationship(back_populates="table")

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def _move_to(self, new_status: TableStatus) -> None:
        self.status = new_status
        self.updated_at = utcnow()
        self.version += 1

    def occupy(self, session_id: uuid.UUID) -> None:
        """Link an opened session and mark the table OCCUPIED"""
        if not self.status.can_transition_to(TableStatus.OCCUPIED):
            raise InvalidStateError(
                f"Table {self.number} is {self.status.value}, only FREE tables can be opened",
                table_id=self.id,
                status=self.status.value,
            )
        self.current_session_id = session_id
        self._move_to(TableStatus.OCCUPIED)

    def release(self) -> None:
        """Unlink the closed session and return the table to FREE"""
        if self.status != TableStatus.OCCUPIED:
            raise InvalidStateError(
                f"Table {self.number} is {self.status.value}, only OCCUPIED tables can be closed",
                table_id=self.id,
                status=self.status.value,
            )
        self.current_session_id = None
        self._move_to(TableStatus.FREE)

    def set_admin_status(self, new_status: TableStatus) -> bool:
        """Apply a manual FREE/DISABLED change; returns False when nothing changed"""
        if new_status not in ADMIN_STATUSES:
            raise InvalidTransitionError(
                f"Status {new_status.value} cannot be set directly, open the table instead",
                table_id=self.id,
                requested=new_status.value,
            )
        if new_status == self.status:
            return False
        if self.status == TableStatus.OCCUPIED:
            raise InvalidTransitionError(
                f"Table {self.number} is OCCUPIED, close its session instead",
                table_id=self.id,
                status=self.status.value,
                requested=new_status.value,
            )
        if new_status not in ADMIN_TRANSITIONS[self.status]:
            raise InvalidTransitionError(
                f"Cannot change table {self.number} from {self.status.value} to {new_status.value}",
                table_id=self.id,
                status=self.status.value,
                requested=new_status.value,
            )
        self._move_to(new_status)
        return True
