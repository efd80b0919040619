"""
Domain events system

Reservation lifecycle events are published after the HTTP response has been
sent, so slow or failing subscribers (e-mail) never block a booking.
"""

from datetime import date
from typing import Any, Callable, Dict, List
import uuid
import structlog

from bistro.core.clock import utc_now

logger = structlog.get_logger(__name__)


class DomainEvent:
    """Base class for domain events"""

    def __init__(self, event_id: uuid.UUID = None):
        self.event_id = event_id or uuid.uuid4()
        self.occurred_at = utc_now()

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary"""
        return {
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "event_type": self.__class__.__name__
        }


class ReservationEvent(DomainEvent):
    """Common payload of every reservation event"""

    def __init__(
        self,
        reservation_id: uuid.UUID,
        user_id: uuid.UUID,
        email: str,
        name: str,
        date: date,
        time: str,
        guests: int,
        event_id: uuid.UUID = None
    ):
        super().__init__(event_id)
        self.reservation_id = reservation_id
        self.user_id = user_id
        self.email = email
        self.name = name
        self.date = date
        self.time = time
        self.guests = guests

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "reservation_id": str(self.reservation_id),
            "user_id": str(self.user_id),
            "email": self.email,
            "date": self.date.isoformat(),
            "time": self.time,
            "guests": self.guests
        })
        return data


class ReservationReceived(ReservationEvent):
    """Event fired when a booking has been stored with its tables"""


class ReservationConfirmed(ReservationEvent):
    """Event fired when staff confirm a reservation"""


class ReservationCancelled(ReservationEvent):
    """Event fired when a reservation is cancelled and its tables released"""


class EventBus:
    """Simple in-memory event bus for publishing domain events"""

    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = {}

    def subscribe(self, event_type: str, handler: Callable):
        """Subscribe to a specific event type"""
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []
        self._subscribers[event_type].append(handler)
        logger.debug("Subscribed handler", event_type=event_type)

    def unsubscribe(self, event_type: str, handler: Callable):
        """Unsubscribe from an event type"""
        if event_type in self._subscribers:
            self._subscribers[event_type].remove(handler)
            logger.debug("Unsubscribed handler", event_type=event_type)

    async def publish(self, event: DomainEvent):
        """Publish an event to all subscribers, never raising"""
        event_type = event.__class__.__name__
        handlers = self._subscribers.get(event_type, [])

        if not handlers:
            logger.debug("No subscribers for event", event_type=event_type)
            return

        logger.info("Publishing event", event_type=event_type, event_id=str(event.event_id))

        for handler in handlers:
            try:
                await handler(event)
            except Exception as e:
                logger.error(
                    "Error in event handler",
                    event_type=event_type,
                    error=str(e),
                    exc_info=True,
                )

    def clear_subscribers(self):
        """Clear all subscribers (useful for testing)"""
        self._subscribers.clear()
        logger.debug("Cleared all event subscribers")


# Global event bus instance
event_bus = EventBus()
