"""
Reservation orchestration: allocate tables, write the ledger, emit events

A booking is one reservation row plus one assignment row per allocated
table, committed together. If any of those writes fails the transaction is
rolled back and any reservation row that is still visible is deleted, so a
reservation never survives without its full set of tables.
"""

from typing import Any, Dict, List, Optional
import uuid

from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlmodel import Session
import structlog

from bistro.core.events import (
    DomainEvent, ReservationCancelled, ReservationConfirmed, ReservationEvent,
    ReservationReceived
)
from bistro.core.exceptions import (
    AppError, BadRequestError, ConflictError, NotFoundError, ServerError
)
from bistro.models.reservation import DiningSlot, Reservation, ReservationStatus
from bistro.models.user import User
from bistro.schemas.reservation import (
    CustomerReservationRead, ReservationCreate, ReservationRead
)
from bistro.services.allocator import TableAllocator
from bistro.services.availability import AvailabilityChecker
from bistro.services.reservation_ledger import ReservationLedger
from bistro.services.table_directory import TableDirectory

logger = structlog.get_logger(__name__)

RESERVATION_NOT_FOUND = "The reservation with the requested id does not exists"
USER_NOT_FOUND = "The user with the requested id does not exists"


def classify_storage_error(exc: SQLAlchemyError, conflict_message: str) -> AppError:
    """Map a failed write onto the API error taxonomy"""
    if isinstance(exc, IntegrityError):
        return ConflictError(conflict_message)
    if isinstance(exc, DataError):
        return BadRequestError("Invalid body data")
    return ServerError()


class ReservationService:
    """Booking, status changes and lookups of reservations.

    Events produced by an operation are collected in ``events``; the caller
    publishes them once the response is on its way.
    """

    def __init__(self, session: Session):
        self.session = session
        self.directory = TableDirectory(session)
        self.ledger = ReservationLedger(session)
        self.availability = AvailabilityChecker(self.ledger, self.directory)
        self.allocator = TableAllocator(self.directory, self.availability)
        self.events: List[DomainEvent] = []

    def create_by_location(self, data: ReservationCreate) -> Reservation:
        """Book enough free tables at ``data.location`` for the party"""
        user = self.session.get(User, data.user_id)
        if not user:
            raise NotFoundError(USER_NOT_FOUND)

        # Raises InsufficientCapacityError (409) before anything is written
        tables = self.allocator.allocate(data.location, data.date, data.time, data.guests)

        reservation_id: Optional[uuid.UUID] = None
        try:
            reservation = self.ledger.create_reservation(
                data.date, data.time, data.guests, data.status, data.user_id
            )
            reservation_id = reservation.id
            for table in tables:
                self.ledger.create_assignment(reservation.id, table.id, data.date, data.time)
            self.ledger.commit()
        except Exception as exc:
            self.ledger.rollback()
            self._compensate(reservation_id)
            logger.warning(
                "Reservation rolled back",
                location=data.location,
                user_id=str(data.user_id),
                error=str(exc),
            )
            if isinstance(exc, SQLAlchemyError):
                raise classify_storage_error(exc, "Tables already reserved") from exc
            raise

        self.session.refresh(reservation)
        logger.info(
            "Reservation created",
            reservation_id=str(reservation.id),
            location=data.location,
            tables=[table.number for table in tables],
            guests=data.guests,
        )
        self.events.append(self._event(ReservationReceived, reservation, user))
        return reservation

    def _compensate(self, reservation_id: Optional[uuid.UUID]) -> None:
        """Delete a half-written reservation, attempted once"""
        if reservation_id is None:
            return
        try:
            if self.ledger.delete_reservation(reservation_id):
                logger.info("Compensating delete applied", reservation_id=str(reservation_id))
        except SQLAlchemyError as exc:
            self.ledger.rollback()
            logger.error(
                "Compensating delete failed",
                reservation_id=str(reservation_id),
                error=str(exc),
            )

    def get_by_id(self, reservation_id: uuid.UUID) -> Reservation:
        reservation = self.ledger.get_reservation(reservation_id)
        if not reservation:
            raise NotFoundError(RESERVATION_NOT_FOUND)
        return reservation

    def query(self, filters: Optional[Dict[str, Any]] = None) -> List[Reservation]:
        return self.ledger.query(filters)

    def list_customer_reservations(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> List[CustomerReservationRead]:
        """Reservations with owner name and table numbers attached"""
        results = []
        for reservation in self.ledger.query(filters):
            user = self.session.get(User, reservation.user_id)
            results.append(
                CustomerReservationRead(
                    **ReservationRead.model_validate(reservation).model_dump(),
                    name=user.name if user else None,
                    surname=user.surname if user else None,
                    tables=self.ledger.table_numbers_for_reservation(reservation.id),
                )
            )
        return results

    def set_status(self, reservation_id: uuid.UUID, status: str) -> Reservation:
        """Move a reservation along its lifecycle.

        Unknown statuses are rejected (400), illegal moves conflict (409) and
        re-applying the current status is a no-op. Cancelling frees the tables.
        """
        reservation = self.get_by_id(reservation_id)

        try:
            target = ReservationStatus(status)
        except ValueError:
            raise BadRequestError(f"Unknown reservation status: {status}")

        if reservation.status == target:
            return reservation

        previous = ReservationStatus(reservation.status)
        if not reservation.can_transition_to(target):
            raise ConflictError(
                f"Cannot change a {previous.value} reservation to {target.value}"
            )

        try:
            if target == ReservationStatus.CANCELLED:
                self.ledger.release_assignments(reservation.id)
            self.ledger.update_status(reservation.id, target)
            self.ledger.commit()
        except SQLAlchemyError as exc:
            self.ledger.rollback()
            raise classify_storage_error(exc, "The reservation changed concurrently") from exc

        self.session.refresh(reservation)
        logger.info(
            "Reservation status changed",
            reservation_id=str(reservation.id),
            previous=previous.value,
            status=target.value,
        )

        event_type = {
            ReservationStatus.CONFIRMED: ReservationConfirmed,
            ReservationStatus.CANCELLED: ReservationCancelled,
        }.get(target)
        if event_type:
            user = self.session.get(User, reservation.user_id)
            if user:
                self.events.append(self._event(event_type, reservation, user))
            else:
                logger.warning("Reservation owner not found", reservation_id=str(reservation.id))

        return reservation

    def delete_reservation(self, reservation_id: uuid.UUID) -> ReservationRead:
        """Delete a reservation (and its assignments), returning what was removed"""
        reservation = self.get_by_id(reservation_id)
        snapshot = ReservationRead.model_validate(reservation)

        self.ledger.delete_reservation(reservation.id)
        logger.info("Reservation deleted", reservation_id=str(reservation_id))
        return snapshot

    @staticmethod
    def _event(event_type, reservation: Reservation, user: User) -> ReservationEvent:
        return event_type(
            reservation_id=reservation.id,
            user_id=user.id,
            email=user.email,
            name=user.name,
            date=reservation.date,
            time=DiningSlot(reservation.time).value,
            guests=reservation.guests,
        )
