"""
E-mail notifications for reservation events

Without an SMTP host configured, messages are only logged and the latest
ones are kept in ``outbox`` so development setups and tests can inspect them.
"""

from collections import deque
from email.message import EmailMessage
import smtplib
from typing import Deque, Dict

from starlette.concurrency import run_in_threadpool
import structlog

from bistro.core.clock import utc_now
from bistro.core.config import Settings, get_settings
from bistro.core.events import (
    EventBus, ReservationCancelled, ReservationConfirmed, ReservationEvent,
    ReservationReceived
)

logger = structlog.get_logger(__name__)

# Undelivered messages kept for inspection, oldest dropped first
OUTBOX_SIZE = 100


class EmailNotifier:
    """Send plain-text e-mails to customers"""

    def __init__(self, settings: Settings = None):
        self.settings = settings or get_settings()
        self.outbox: Deque[Dict] = deque(maxlen=OUTBOX_SIZE)

    async def send(self, to_address: str, subject: str, body: str) -> bool:
        """Deliver one message; SMTP failures propagate to the caller"""
        message = EmailMessage()
        message["From"] = self.settings.MAIL_FROM
        message["To"] = to_address
        message["Subject"] = subject
        message.set_content(body)

        if self.settings.SMTP_HOST:
            await run_in_threadpool(self._deliver, message)
            logger.info("Email sent", to=to_address, subject=subject)
            return True

        logger.info("Email not delivered, no SMTP host configured", to=to_address, subject=subject)
        self.outbox.append({
            "to": to_address,
            "subject": subject,
            "body": body,
            "sent_at": utc_now(),
        })
        return True

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.settings.SMTP_HOST, self.settings.SMTP_PORT, timeout=10) as smtp:
            if self.settings.SMTP_USE_TLS:
                smtp.starttls()
            if self.settings.SMTP_USERNAME:
                smtp.login(self.settings.SMTP_USERNAME, self.settings.SMTP_PASSWORD)
            smtp.send_message(message)


def _slot_line(event: ReservationEvent) -> str:
    return f"{event.date.strftime('%d/%m/%Y')}, {event.time}, {event.guests} guests"


def register_notification_handlers(bus: EventBus, notifier: EmailNotifier) -> None:
    """Subscribe the notifier to reservation lifecycle events"""

    async def on_received(event: ReservationReceived):
        await notifier.send(
            event.email,
            f"Reservation received, {event.name}!",
            "We have received your reservation "
            f"({_slot_line(event)}). "
            "You will get another e-mail as soon as it is confirmed.",
        )

    async def on_confirmed(event: ReservationConfirmed):
        await notifier.send(
            event.email,
            f"Good news, {event.name}!",
            f"Your reservation ({_slot_line(event)}) has been confirmed.",
        )

    async def on_cancelled(event: ReservationCancelled):
        await notifier.send(
            event.email,
            f"Reservation cancelled, {event.name}",
            f"Your reservation ({_slot_line(event)}) has been cancelled.",
        )

    bus.subscribe(ReservationReceived.__name__, on_received)
    bus.subscribe(ReservationConfirmed.__name__, on_confirmed)
    bus.subscribe(ReservationCancelled.__name__, on_cancelled)
