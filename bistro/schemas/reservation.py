"""
Schemas for reservation requests and responses
"""

from pydantic import field_validator
from sqlmodel import SQLModel, Field
import datetime as dt
from typing import List, Optional
import uuid

from bistro.models.reservation import DiningSlot, ReservationStatus

# A booking can only start out as a fresh or an already confirmed reservation
INITIAL_STATUSES = {ReservationStatus.PENDING, ReservationStatus.CONFIRMED}


class ReservationCreate(SQLModel):
    date: dt.date
    time: DiningSlot
    guests: int = Field(gt=0)
    status: ReservationStatus
    user_id: uuid.UUID
    location: str = Field(min_length=1, max_length=50)

    @field_validator("status")
    @classmethod
    def check_initial_status(cls, value: ReservationStatus) -> ReservationStatus:
        if value not in INITIAL_STATUSES:
            raise ValueError(f"A reservation cannot be created as {value.value}")
        return value


class ReservationRead(SQLModel):
    id: uuid.UUID
    date: dt.date
    time: DiningSlot
    guests: int
    status: ReservationStatus
    user_id: uuid.UUID
    created_at: dt.datetime
    updated_at: Optional[dt.datetime] = None


class CustomerReservationRead(ReservationRead):
    """Reservation with its owner's name and the numbers of its tables"""
    name: Optional[str] = None
    surname: Optional[str] = None
    tables: List[int] = []


class ReservationCreated(SQLModel):
    message: str
    reservationId: uuid.UUID


class MessageResponse(SQLModel):
    message: str
