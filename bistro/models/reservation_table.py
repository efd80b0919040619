"""
Table assignment: binds a table to a reservation for one slot
"""

from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import UniqueConstraint
import datetime as dt
from typing import Optional, TYPE_CHECKING
import uuid

from bistro.models.reservation import DiningSlot

if TYPE_CHECKING:
    from bistro.models.reservation import Reservation
    from bistro.models.table import Table


class ReservationTable(SQLModel, table=True):
    """A table held for a reservation on a given date and slot"""

    __tablename__ = "reservation_tables"
    # One table can be held by at most one reservation per slot
    __table_args__ = (
        UniqueConstraint("table_id", "date", "time", name="uq_table_slot"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    reservation_id: uuid.UUID = Field(
        foreign_key="reservations.id",
        ondelete="CASCADE",
        index=True,
    )
    table_id: uuid.UUID = Field(
        foreign_key="tables.id",
        index=True,
    )

    date: dt.date = Field(index=True, nullable=False)
    time: DiningSlot = Field(nullable=False)

    # Relationships
    reservation: Optional["Reservation"] = Relationship(back_populates="tables")
    table: Optional["Table"] = Relationship(back_populates="assignments")
