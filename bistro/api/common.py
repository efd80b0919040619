"""
Helpers shared by the routers
"""

from typing import Iterable
import uuid

from fastapi import BackgroundTasks

from bistro.core.events import DomainEvent, event_bus
from bistro.core.exceptions import NotFoundError


def parse_id(value: str, not_found_message: str) -> uuid.UUID:
    """A malformed id cannot exist, so it is reported as not found"""
    try:
        return uuid.UUID(value)
    except ValueError:
        raise NotFoundError(not_found_message)


def schedule_events(background_tasks: BackgroundTasks, events: Iterable[DomainEvent]) -> None:
    """Publish events after the response has been sent"""
    for event in events:
        background_tasks.add_task(event_bus.publish, event)
