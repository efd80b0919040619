"""
Table model for restaurant seating
"""

from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import CheckConstraint, DateTime
from datetime import datetime
from typing import Optional, TYPE_CHECKING
import uuid

from bistro.core.clock import utc_now

if TYPE_CHECKING:
    from bistro.models.reservation_table import ReservationTable


class Table(SQLModel, table=True):
    """Physical table that can be allocated to reservations"""

    __tablename__ = "tables"
    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_table_capacity_positive"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    # Table details
    number: int = Field(unique=True, index=True, nullable=False, description="Human-facing table number")
    capacity: int = Field(default=4, description="Maximum number of guests")
    location: str = Field(index=True, max_length=50, nullable=False, description="Dining area: terrace, indoor, patio, etc.")

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    # Relationships
    assignments: list["ReservationTable"] = Relationship(back_populates="table")
