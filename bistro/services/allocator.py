"""
Table allocator: pick tables that can seat a party in a slot
"""

from datetime import date
from typing import List

import structlog

from bistro.core.exceptions import BadRequestError, InsufficientCapacityError
from bistro.models.reservation import DiningSlot
from bistro.models.table import Table
from bistro.services.availability import AvailabilityChecker
from bistro.services.table_directory import TableDirectory

logger = structlog.get_logger(__name__)


class TableAllocator:
    """First-fit greedy allocation over the directory order of a location.

    Free tables are taken in table-number order until their combined
    capacity covers the party. The last table taken may overshoot the party
    size; no attempt is made to find a tighter combination. Nothing is
    written here, so a failed allocation leaves no trace.
    """

    def __init__(self, directory: TableDirectory, availability: AvailabilityChecker):
        self.directory = directory
        self.availability = availability

    def allocate(self, location: str, date: date, time: DiningSlot, guests: int) -> List[Table]:
        if guests <= 0:
            raise BadRequestError("Guests must be a positive number")

        selected: List[Table] = []
        capacity = 0

        for table in self.directory.list_by_location(location):
            if capacity >= guests:
                break
            if self.availability.is_reserved(table.id, date, time):
                continue
            selected.append(table)
            capacity += table.capacity

        if guests > capacity:
            logger.info(
                "Not enough free tables",
                location=location,
                date=date.isoformat(),
                time=DiningSlot(time).value,
                guests=guests,
                capacity=capacity,
            )
            raise InsufficientCapacityError(guests=guests, capacity=capacity)

        logger.debug(
            "Tables allocated",
            location=location,
            tables=[table.number for table in selected],
            capacity=capacity,
            guests=guests,
        )
        return selected
