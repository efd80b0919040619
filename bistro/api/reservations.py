"""
Reservations API endpoints
"""

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlmodel import Session
from typing import List, Optional
import datetime as dt
import uuid

from bistro.api.common import parse_id, schedule_events
from bistro.core.database import get_session
from bistro.core.dependencies import get_current_user_id
from bistro.models.reservation import DiningSlot, ReservationStatus
from bistro.schemas.reservation import (
    CustomerReservationRead, MessageResponse, ReservationCreate,
    ReservationCreated, ReservationRead
)
from bistro.services.reservation_service import RESERVATION_NOT_FOUND, ReservationService

router = APIRouter(dependencies=[Depends(get_current_user_id)])


def reservation_filters(
    id: Optional[uuid.UUID] = Query(None),
    date: Optional[dt.date] = Query(None),
    time: Optional[DiningSlot] = Query(None),
    guests: Optional[int] = Query(None),
    status: Optional[ReservationStatus] = Query(None),
    user_id: Optional[uuid.UUID] = Query(None),
) -> dict:
    """Optional query filters, only the ones supplied"""
    filters = {
        "id": id,
        "date": date,
        "time": time,
        "guests": guests,
        "status": status,
        "user_id": user_id,
    }
    return {key: value for key, value in filters.items() if value is not None}


@router.get("", response_model=List[ReservationRead])
def list_reservations(
    filters: dict = Depends(reservation_filters),
    session: Session = Depends(get_session)
):
    """List reservations, optionally filtered"""
    return ReservationService(session).query(filters)


@router.get("/customer", response_model=List[CustomerReservationRead])
def list_customer_reservations(
    filters: dict = Depends(reservation_filters),
    session: Session = Depends(get_session)
):
    """List reservations with customer name and table numbers"""
    return ReservationService(session).list_customer_reservations(filters)


@router.get("/{reservation_id}", response_model=ReservationRead)
def get_reservation(
    reservation_id: str,
    session: Session = Depends(get_session)
):
    """Get reservation by ID"""
    return ReservationService(session).get_by_id(parse_id(reservation_id, RESERVATION_NOT_FOUND))


@router.post("", response_model=ReservationCreated)
def create_reservation(
    reservation_data: ReservationCreate,
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session)
):
    """Book tables at a location for a party"""
    service = ReservationService(session)
    reservation = service.create_by_location(reservation_data)
    schedule_events(background_tasks, service.events)

    return ReservationCreated(message="Reservation successful", reservationId=reservation.id)


@router.put("/{reservation_id}/status/{status}", response_model=MessageResponse)
def set_reservation_status(
    reservation_id: str,
    status: str,
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session)
):
    """Change the status of a reservation"""
    service = ReservationService(session)
    service.set_status(parse_id(reservation_id, RESERVATION_NOT_FOUND), status)
    schedule_events(background_tasks, service.events)

    return MessageResponse(message="Update successful")


@router.delete("/{reservation_id}", response_model=ReservationRead)
def delete_reservation(
    reservation_id: str,
    session: Session = Depends(get_session)
):
    """Delete a reservation and release its tables"""
    return ReservationService(session).delete_reservation(
        parse_id(reservation_id, RESERVATION_NOT_FOUND)
    )
