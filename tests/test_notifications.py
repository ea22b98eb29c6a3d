import json
from datetime import date

import httpx
import pytest

from salonbook.config.settings import get_settings
from salonbook.models import Booking
from salonbook.services.notification.notification_service import (
    CeleryNotificationDispatcher,
    NotificationDispatcher,
    build_event_payload,
    get_dispatcher,
)
from salonbook.tasks import notification_tasks
from salonbook.tasks.notification_tasks import dispatch_booking_event, sign_payload, verify_signature


def make_booking():
    return Booking(
        id="9b0c5f8e-1d1a-4a53-8c52-3f7a3e9c2b11",
        user_id="user-1",
        business_id="0f7c1c53-5b9c-4c8e-9a4d-6b2b6c1d7e21",
        booking_date=date(2024, 6, 10),
        booking_time="10:00",
        status="pending",
    )


def test_payload_envelope():
    payload = build_event_payload("booking.created", make_booking())

    assert payload["event"] == "booking.created"
    assert payload["business_id"] == "0f7c1c53-5b9c-4c8e-9a4d-6b2b6c1d7e21"
    assert payload["data"]["time"] == "10:00"
    assert "timestamp" in payload


def test_payload_rejects_unknown_event():
    with pytest.raises(ValueError):
        build_event_payload("booking.deleted", make_booking())


def test_dispatcher_selection():
    assert type(get_dispatcher(enabled=False)) is NotificationDispatcher
    assert isinstance(get_dispatcher(enabled=True), CeleryNotificationDispatcher)


def test_publish_swallows_broker_errors(monkeypatch):
    def broken_delay(*args, **kwargs):
        raise ConnectionError("redis unavailable")

    monkeypatch.setattr(dispatch_booking_event, "delay", broken_delay)

    payload = build_event_payload("booking.created", make_booking())
    CeleryNotificationDispatcher._publish("booking.created", payload)


def test_publish_enqueues_task(monkeypatch):
    calls = []
    monkeypatch.setattr(dispatch_booking_event, "delay", lambda *args: calls.append(args))

    # no running loop: publishes inline
    CeleryNotificationDispatcher().booking_event("booking.cancelled", make_booking())

    assert len(calls) == 1
    assert calls[0][0] == "booking.cancelled"
    assert calls[0][1]["data"]["id"] == "9b0c5f8e-1d1a-4a53-8c52-3f7a3e9c2b11"


def test_signature_round_trip():
    body = json.dumps({"event": "booking.created"})
    signature = sign_payload(body, "s3cret")

    assert signature.startswith("sha256=")
    assert verify_signature(body, signature, "s3cret")
    assert not verify_signature(body, signature, "other")


def test_task_skips_without_receiver(monkeypatch):
    monkeypatch.setattr(get_settings(), "BOOKING_EVENTS_WEBHOOK_URL", None)

    result = dispatch_booking_event("booking.created", {"data": {"id": "abc"}})

    assert result["status"] == "skipped"


def test_task_posts_signed_event(monkeypatch):
    settings = get_settings()
    monkeypatch.setattr(settings, "BOOKING_EVENTS_WEBHOOK_URL", "https://hooks.example.test/bookings")
    monkeypatch.setattr(settings, "BOOKING_EVENTS_WEBHOOK_SECRET", "s3cret")
    sent = {}

    def fake_post(url, content, headers, timeout):
        sent.update(url=url, content=content, headers=headers)
        return httpx.Response(200, request=httpx.Request("POST", url))

    monkeypatch.setattr(notification_tasks.httpx, "post", fake_post)

    payload = {"event": "booking.confirmed", "data": {"id": "abc"}}
    result = dispatch_booking_event("booking.confirmed", payload)

    assert result["status"] == "success"
    assert sent["url"] == "https://hooks.example.test/bookings"
    assert sent["headers"]["X-Booking-Event"] == "booking.confirmed"
    assert verify_signature(sent["content"], sent["headers"]["X-Booking-Signature"], "s3cret")


def test_task_raises_delivery_errors_for_retry(monkeypatch):
    monkeypatch.setattr(get_settings(), "BOOKING_EVENTS_WEBHOOK_URL", "https://hooks.example.test/bookings")

    def failing_post(url, content, headers, timeout):
        return httpx.Response(502, request=httpx.Request("POST", url))

    monkeypatch.setattr(notification_tasks.httpx, "post", failing_post)

    with pytest.raises(httpx.HTTPError):
        dispatch_booking_event("booking.created", {"data": {"id": "abc"}})

