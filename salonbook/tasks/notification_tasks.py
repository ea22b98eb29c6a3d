# ===== salonbook/tasks/notification_tasks.py =====
from typing import Any, Dict
import hashlib
import hmac
import json
import logging

import httpx

from salonbook.config.celery_config import celery_app
from salonbook.config.settings import get_settings

logger = logging.getLogger(__name__)


def sign_payload(payload_json: str, secret: str) -> str:
    """
    Sign the payload using HMAC-SHA256.
    Receivers verify X-Booking-Signature to make sure the event came from us.
    """
    signature = hmac.new(
        secret.encode(),
        payload_json.encode(),
        hashlib.sha256
    ).hexdigest()

    return f"sha256={signature}"


def verify_signature(payload_json: str, signature: str, secret: str) -> bool:
    """
    Receiver-side check of the X-Booking-Signature header.
    Webhook consumers call this with the raw request body and the shared secret.
    """
    return hmac.compare_digest(signature, sign_payload(payload_json, secret))


@celery_app.task(bind=True, max_retries=3)
def dispatch_booking_event(self, event_type: str, payload: Dict[str, Any]):
    """
    Deliver a booking event to the configured webhook receiver

    Args:
        event_type: booking.created / confirmed / completed / cancelled
        payload: Event envelope built by the notification dispatcher
    """
    settings = get_settings()
    booking_id = payload.get("data", {}).get("id")

    if not settings.BOOKING_EVENTS_WEBHOOK_URL:
        logger.info(f"No booking events receiver configured, skipping {event_type} for {booking_id}")
        return {"status": "skipped", "event": event_type}

    payload_json = json.dumps(payload, sort_keys=True)
    headers = {
        "Content-Type": "application/json",
        "X-Booking-Event": event_type,
        "X-Booking-Signature": sign_payload(payload_json, settings.BOOKING_EVENTS_WEBHOOK_SECRET),
    }

    try:
        logger.info(f"Delivering {event_type} for booking {booking_id}")

        response = httpx.post(
            settings.BOOKING_EVENTS_WEBHOOK_URL,
            content=payload_json,
            headers=headers,
            timeout=settings.WEBHOOK_TIMEOUT_SECONDS,
        )
        response.raise_for_status()

        logger.info(f"Delivered {event_type} for booking {booking_id} ({response.status_code})")
        return {"status": "success", "event": event_type, "status_code": response.status_code}

    except httpx.HTTPError as exc:
        logger.error(f"Failed to deliver {event_type} for booking {booking_id}: {exc}")

        # Retry with exponential backoff: 1min, 2min, 4min
        raise self.retry(
            exc=exc,
            countdown=60 * (2 ** self.request.retries)
        )
