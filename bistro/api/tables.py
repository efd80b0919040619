"""
Tables API endpoints (admin only)
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session
from typing import List
import datetime as dt

from bistro.api.common import parse_id
from bistro.core.database import get_session
from bistro.core.dependencies import require_admin
from bistro.schemas.reservation import MessageResponse
from bistro.schemas.table import (
    ReservationTableRead, TableAvailability, TableCreate, TableCreated, TableRead
)
from bistro.services.availability import AvailabilityChecker
from bistro.services.reservation_ledger import ReservationLedger
from bistro.services.table_directory import TableDirectory

router = APIRouter(dependencies=[Depends(require_admin)])

TABLE_NOT_FOUND = "The table with the requested id does not exists"


def get_availability(session: Session = Depends(get_session)) -> AvailabilityChecker:
    return AvailabilityChecker(ReservationLedger(session), TableDirectory(session))


@router.get("", response_model=List[TableRead])
def list_tables(session: Session = Depends(get_session)):
    """List all tables ordered by number"""
    return TableDirectory(session).list_all()


@router.get("/available/{date}", response_model=List[TableAvailability])
def list_availability_by_date(
    date: dt.date,
    availability: AvailabilityChecker = Depends(get_availability)
):
    """Per-slot availability of every table on a date"""
    return availability.availability_for_date(date)


@router.get("/future/{date}", response_model=List[ReservationTableRead])
def list_future_assignments(
    date: dt.date,
    availability: AvailabilityChecker = Depends(get_availability)
):
    """Table assignments on or after a date"""
    return availability.assignments_from(date)


@router.post("", response_model=TableCreated)
def create_table(
    table_data: TableCreate,
    session: Session = Depends(get_session)
):
    """Create a new table"""
    table = TableDirectory(session).create(
        table_data.number, table_data.capacity, table_data.location
    )
    return TableCreated(message="Creation successful", tableId=table.id)


@router.put("/{table_id}/capacity/{capacity}", response_model=MessageResponse)
def set_table_capacity(
    table_id: str,
    capacity: int,
    session: Session = Depends(get_session)
):
    """Change the seating capacity of a table"""
    TableDirectory(session).set_capacity(parse_id(table_id, TABLE_NOT_FOUND), capacity)
    return MessageResponse(message="Update successful")


@router.delete("/{table_id}", response_model=TableRead)
def delete_table(
    table_id: str,
    session: Session = Depends(get_session)
):
    """Delete a table that holds no reservations"""
    return TableDirectory(session).delete(parse_id(table_id, TABLE_NOT_FOUND))
