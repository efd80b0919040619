"""
Reservation ledger: reservation rows and the table assignments that back them
"""

from datetime import date
from typing import Any, Dict, List, Optional
import uuid

from sqlmodel import Session, select
import structlog

from bistro.core.clock import utc_now
from bistro.models.reservation import DiningSlot, Reservation, ReservationStatus
from bistro.models.reservation_table import ReservationTable
from bistro.models.table import Table

logger = structlog.get_logger(__name__)

# Columns a reservation listing can be filtered on
FILTERABLE_FIELDS = ("id", "date", "time", "guests", "status", "user_id")


class ReservationLedger:
    """Data access for reservations and table assignments.

    Writes are flushed but not committed so a booking and its assignments
    can be committed, or rolled back, as one unit by the caller.
    """

    def __init__(self, session: Session):
        self.session = session

    # Reservations

    def create_reservation(
        self,
        date: date,
        time: DiningSlot,
        guests: int,
        status: ReservationStatus,
        user_id: uuid.UUID,
    ) -> Reservation:
        reservation = Reservation(
            date=date,
            time=time,
            guests=guests,
            status=status,
            user_id=user_id,
        )
        self.session.add(reservation)
        self.session.flush()
        return reservation

    def get_reservation(self, reservation_id: uuid.UUID) -> Optional[Reservation]:
        return self.session.get(Reservation, reservation_id)

    def delete_reservation(self, reservation_id: uuid.UUID) -> bool:
        reservation = self.get_reservation(reservation_id)
        if reservation is None:
            return False

        self.session.delete(reservation)
        self.session.commit()
        return True

    def update_status(self, reservation_id: uuid.UUID, status: ReservationStatus) -> bool:
        reservation = self.get_reservation(reservation_id)
        if reservation is None:
            return False

        reservation.status = status
        reservation.updated_at = utc_now()
        self.session.add(reservation)
        self.session.flush()
        return True

    def query(self, filters: Optional[Dict[str, Any]] = None) -> List[Reservation]:
        """List reservations matching every given filter, unknown keys ignored"""
        statement = select(Reservation)
        for key, value in (filters or {}).items():
            if key in FILTERABLE_FIELDS and value is not None:
                statement = statement.where(getattr(Reservation, key) == value)

        statement = statement.order_by(Reservation.date, Reservation.created_at)
        return list(self.session.exec(statement).all())

    # Table assignments

    def assignment_exists(self, table_id: uuid.UUID, date: date, time: DiningSlot) -> bool:
        found = self.session.exec(
            select(ReservationTable.id).where(
                ReservationTable.table_id == table_id,
                ReservationTable.date == date,
                ReservationTable.time == time,
            )
        ).first()
        return found is not None

    def create_assignment(
        self,
        reservation_id: uuid.UUID,
        table_id: uuid.UUID,
        date: date,
        time: DiningSlot,
    ) -> ReservationTable:
        """Hold a table for a reservation; raises IntegrityError if the slot is taken"""
        assignment = ReservationTable(
            reservation_id=reservation_id,
            table_id=table_id,
            date=date,
            time=time,
        )
        self.session.add(assignment)
        self.session.flush()
        return assignment

    def table_ids_for_reservation(self, reservation_id: uuid.UUID) -> List[uuid.UUID]:
        return list(
            self.session.exec(
                select(ReservationTable.table_id).where(
                    ReservationTable.reservation_id == reservation_id
                )
            ).all()
        )

    def table_numbers_for_reservation(self, reservation_id: uuid.UUID) -> List[int]:
        return list(
            self.session.exec(
                select(Table.number)
                .join(ReservationTable, ReservationTable.table_id == Table.id)
                .where(ReservationTable.reservation_id == reservation_id)
                .order_by(Table.number)
            ).all()
        )

    def release_assignments(self, reservation_id: uuid.UUID) -> int:
        """Free every table held by a reservation"""
        assignments = self.session.exec(
            select(ReservationTable).where(ReservationTable.reservation_id == reservation_id)
        ).all()
        for assignment in assignments:
            self.session.delete(assignment)
        self.session.flush()

        logger.info("Released table assignments", reservation_id=str(reservation_id), count=len(assignments))
        return len(assignments)

    def assignments_on(self, day: date) -> List[ReservationTable]:
        return list(
            self.session.exec(
                select(ReservationTable).where(ReservationTable.date == day)
            ).all()
        )

    def assignments_from(self, day: date) -> List[ReservationTable]:
        return list(
            self.session.exec(
                select(ReservationTable)
                .where(ReservationTable.date >= day)
                .order_by(ReservationTable.date, ReservationTable.time)
            ).all()
        )

    # Transaction control

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
