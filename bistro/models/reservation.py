"""
Reservation model with lifecycle state machine
"""

from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import CheckConstraint, DateTime
import datetime as dt
from typing import Optional, TYPE_CHECKING
from enum import Enum
import uuid

from bistro.core.clock import utc_now

if TYPE_CHECKING:
    from bistro.models.reservation_table import ReservationTable


class DiningSlot(str, Enum):
    """Bookable periods of a day"""
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class ReservationStatus(str, Enum):
    """Status of a reservation"""
    PENDING = "pending"             # Booked, waiting for staff
    CONFIRMED = "confirmed"         # Accepted by staff
    COMPLETED = "completed"         # Guests came and left
    CANCELLED = "cancelled"         # Terminal, tables released


ALLOWED_TRANSITIONS = {
    ReservationStatus.PENDING: {ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED},
    ReservationStatus.CONFIRMED: {ReservationStatus.COMPLETED, ReservationStatus.CANCELLED},
    ReservationStatus.COMPLETED: set(),
    ReservationStatus.CANCELLED: set(),
}


class Reservation(SQLModel, table=True):
    """Reservation of one or more tables for a party in a slot"""

    __tablename__ = "reservations"
    __table_args__ = (
        CheckConstraint("guests > 0", name="ck_reservation_guests_positive"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    # Slot
    date: dt.date = Field(index=True, nullable=False)
    time: DiningSlot = Field(index=True, nullable=False)

    guests: int = Field(nullable=False, description="Party size")
    status: ReservationStatus = Field(
        default=ReservationStatus.PENDING,
        index=True,
        description="Current status of the reservation"
    )

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
        description="Customer who owns the reservation"
    )

    # Timestamps
    created_at: dt.datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: Optional[dt.datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    # Relationships
    tables: list["ReservationTable"] = Relationship(
        back_populates="reservation",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )

    def can_transition_to(self, status: ReservationStatus) -> bool:
        return status in ALLOWED_TRANSITIONS[ReservationStatus(self.status)]

