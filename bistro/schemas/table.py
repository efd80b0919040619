"""
Schemas for table provisioning and availability
"""

from sqlmodel import SQLModel, Field
import datetime as dt
from typing import Dict, Optional
import uuid

from bistro.models.reservation import DiningSlot


class TableCreate(SQLModel):
    number: int = Field(gt=0)
    capacity: int = Field(gt=0)
    location: str = Field(min_length=1, max_length=50)


class TableRead(SQLModel):
    id: uuid.UUID
    number: int
    capacity: int
    location: str
    created_at: dt.datetime
    updated_at: Optional[dt.datetime] = None


class TableCreated(SQLModel):
    message: str
    tableId: uuid.UUID


class TableAvailability(SQLModel):
    """Which slots of a day a table is still free for"""
    id: uuid.UUID
    number: int
    available: Dict[DiningSlot, bool]


class ReservationTableRead(SQLModel):
    id: uuid.UUID
    reservation_id: uuid.UUID
    table_id: uuid.UUID
    date: dt.date
    time: DiningSlot
