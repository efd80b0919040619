"""
Table directory: the registry of physical tables
"""

from typing import List, Optional
import uuid

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select
import structlog

from bistro.core.clock import utc_now
from bistro.core.exceptions import BadRequestError, ConflictError, NotFoundError
from bistro.models.reservation import Reservation, ReservationStatus
from bistro.models.reservation_table import ReservationTable
from bistro.models.table import Table

logger = structlog.get_logger(__name__)


class TableDirectory:
    """Lookup and provisioning of tables.

    Listings are ordered by table number, which is the order the allocator
    walks when it picks tables for a party.
    """

    def __init__(self, session: Session):
        self.session = session

    def list_all(self) -> List[Table]:
        return list(self.session.exec(select(Table).order_by(Table.number)).all())

    def list_by_location(self, location: str) -> List[Table]:
        return list(
            self.session.exec(
                select(Table).where(Table.location == location).order_by(Table.number)
            ).all()
        )

    def get_by_id(self, table_id: uuid.UUID) -> Optional[Table]:
        return self.session.get(Table, table_id)

    def get_by_number(self, number: int) -> Optional[Table]:
        return self.session.exec(select(Table).where(Table.number == number)).first()

    def create(self, number: int, capacity: int, location: str) -> Table:
        if capacity <= 0:
            raise BadRequestError("Capacity must be a positive number")

        table = Table(number=number, capacity=capacity, location=location)
        self.session.add(table)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise ConflictError("Table with the selected number already exists")

        self.session.refresh(table)
        logger.info("Table created", table_id=str(table.id), number=number, location=location)
        return table

    def set_capacity(self, table_id: uuid.UUID, capacity: int) -> Table:
        if capacity <= 0:
            raise BadRequestError("Capacity must be a positive number")

        table = self.get_by_id(table_id)
        if not table:
            raise NotFoundError("The table with the requested id does not exists")

        if capacity < table.capacity:
            self._check_seats_after_shrink(table, capacity)

        table.capacity = capacity
        table.updated_at = utc_now()
        self.session.add(table)
        self.session.commit()
        self.session.refresh(table)

        logger.info("Table capacity updated", table_id=str(table_id), capacity=capacity)
        return table

    def _check_seats_after_shrink(self, table: Table, capacity: int) -> None:
        """Every non-cancelled reservation holding the table must still seat its party"""
        holders = self.session.exec(
            select(Reservation)
            .join(ReservationTable, ReservationTable.reservation_id == Reservation.id)
            .where(
                ReservationTable.table_id == table.id,
                Reservation.status != ReservationStatus.CANCELLED,
            )
        ).all()

        for reservation in holders:
            seats = self.session.exec(
                select(func.sum(Table.capacity))
                .join(ReservationTable, ReservationTable.table_id == Table.id)
                .where(ReservationTable.reservation_id == reservation.id)
            ).one()
            if seats - table.capacity + capacity < reservation.guests:
                logger.info(
                    "Capacity change refused",
                    table_id=str(table.id),
                    reservation_id=str(reservation.id),
                    guests=reservation.guests,
                )
                raise ConflictError("The table is too small for a reservation that holds it")

    def delete(self, table_id: uuid.UUID) -> Table:
        """Remove a table that no reservation is holding.

        Completed reservations keep their tables on record, so a table that
        has served one can no longer be deleted.
        """
        table = self.get_by_id(table_id)
        if not table:
            raise NotFoundError("The table with the requested id does not exists")

        held = self.session.exec(
            select(ReservationTable.id).where(ReservationTable.table_id == table_id)
        ).first()
        if held:
            raise ConflictError("The table is assigned to existing reservations")

        self.session.delete(table)
        self.session.commit()

        logger.info("Table deleted", table_id=str(table_id), number=table.number)
        return table
