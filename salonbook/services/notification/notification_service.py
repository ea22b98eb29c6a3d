# salonbook/services/notification/notification_service.py
"""Fire-and-forget booking event dispatch to notification collaborators"""
import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
import logging

from salonbook.models.booking import Booking

logger = logging.getLogger(__name__)

VALID_EVENT_TYPES = [
    "booking.created",
    "booking.confirmed",
    "booking.completed",
    "booking.cancelled",
]


def build_event_payload(event_type: str, booking: Booking) -> Dict[str, Any]:
    if event_type not in VALID_EVENT_TYPES:
        raise ValueError(f"Invalid event type: {event_type}")

    return {
        "event": event_type,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "business_id": str(booking.business_id),
        "data": booking.to_dict(),
    }


class NotificationDispatcher:
    """Base dispatcher; drops every event"""

    def booking_event(self, event_type: str, booking: Booking) -> None:
        logger.debug(f"Notifications disabled, dropping {event_type} for booking {booking.id}")


class CeleryNotificationDispatcher(NotificationDispatcher):
    """
    Hands events to the Celery notification queue.

    Publishing runs in the default executor and is never awaited, so a slow
    or unreachable broker cannot delay or fail the booking request.
    """

    def booking_event(self, event_type: str, booking: Booking) -> None:
        payload = build_event_payload(event_type, booking)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._publish(event_type, payload)
            return

        future = loop.run_in_executor(None, self._publish, event_type, payload)
        future.add_done_callback(self._log_failure)

    @staticmethod
    def _publish(event_type: str, payload: Dict[str, Any]) -> None:
        from salonbook.tasks.notification_tasks import dispatch_booking_event

        try:
            dispatch_booking_event.delay(event_type, payload)
            logger.info(f"Queued {event_type} for booking {payload['data']['id']}")
        except Exception as e:
            logger.error(f"Failed to queue {event_type} for booking {payload['data']['id']}: {e}")

    @staticmethod
    def _log_failure(future) -> None:
        if not future.cancelled() and future.exception() is not None:
            logger.error(f"Booking event publisher crashed: {future.exception()}")


class RecordingNotificationDispatcher(NotificationDispatcher):
    """Keeps events in memory; used by tests and local tooling"""

    def __init__(self):
        self.events: List[Tuple[str, Dict[str, Any]]] = []

    def booking_event(self, event_type: str, booking: Booking) -> None:
        self.events.append((event_type, build_event_payload(event_type, booking)))

    def types(self) -> List[str]:
        return [event_type for event_type, _ in self.events]


def get_dispatcher(enabled: Optional[bool] = None) -> NotificationDispatcher:
    from salonbook.config.settings import get_settings

    if enabled is None:
        enabled = get_settings().NOTIFICATIONS_ENABLED
    return CeleryNotificationDispatcher() if enabled else NotificationDispatcher()
