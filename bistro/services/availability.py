"""
Availability checker: is a table free for a slot?
"""

from datetime import date
from typing import Dict, List
import uuid

from bistro.models.reservation import DiningSlot
from bistro.models.reservation_table import ReservationTable
from bistro.services.reservation_ledger import ReservationLedger
from bistro.services.table_directory import TableDirectory


class AvailabilityChecker:
    """Read-side view over table assignments.

    ``is_reserved`` is a plain read, not a lock. Two bookings can both see a
    table as free; the ``uq_table_slot`` constraint decides which one wins.
    """

    def __init__(self, ledger: ReservationLedger, directory: TableDirectory):
        self.ledger = ledger
        self.directory = directory

    def is_reserved(self, table_id: uuid.UUID, date: date, time: DiningSlot) -> bool:
        return self.ledger.assignment_exists(table_id, date, time)

    def availability_for_date(self, day: date) -> List[Dict]:
        """Every table with a free/taken flag for each slot of ``day``"""
        taken = {(a.table_id, DiningSlot(a.time)) for a in self.ledger.assignments_on(day)}

        return [
            {
                "id": table.id,
                "number": table.number,
                "available": {slot: (table.id, slot) not in taken for slot in DiningSlot},
            }
            for table in self.directory.list_all()
        ]

    def assignments_from(self, day: date) -> List[ReservationTable]:
        return self.ledger.assignments_from(day)
