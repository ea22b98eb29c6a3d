import uuid

from conftest import MONDAY

WEEK = [
    {"day_of_week": 0, "is_closed": True},
    {"day_of_week": 1, "open_time": "09:00", "close_time": "12:00"},
    {"day_of_week": 2, "open_time": "09:00", "close_time": "12:00"},
]


async def configure(client, business_id):
    r = await client.put(f"/api/v1/dashboard/businesses/{business_id}/hours", json={"hours": WEEK})
    assert r.status_code == 200
    return r.json()


async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"
    assert "X-Correlation-ID" in r.headers


async def test_schedule_configuration_drives_availability(client, make_business):
    business = await make_business(slot_duration=60)
    bid = business.id

    hours = await configure(client, bid)
    assert [h["day_of_week"] for h in hours] == [0, 1, 2]

    r = await client.get(f"/api/v1/businesses/{bid}/availability", params={"date": MONDAY})
    assert r.status_code == 200
    assert r.json()["slots"] == ["09:00", "10:00", "11:00"]

    r = await client.post(
        f"/api/v1/dashboard/businesses/{bid}/breaks",
        json={"day_of_week": 1, "start_time": "10:00", "end_time": "11:00", "label": "Team meeting"},
    )
    assert r.status_code == 201
    break_id = r.json()["id"]

    r = await client.get(f"/api/v1/businesses/{bid}/availability", params={"date": MONDAY})
    assert r.json()["slots"] == ["09:00", "11:00"]

    r = await client.delete(f"/api/v1/dashboard/businesses/{bid}/breaks/{break_id}")
    assert r.status_code == 204

    r = await client.get(f"/api/v1/businesses/{bid}/breaks")
    assert r.json() == []


async def test_holiday_endpoints(client, make_business):
    business = await make_business()
    bid = business.id
    await configure(client, bid)

    r = await client.post(f"/api/v1/dashboard/businesses/{bid}/holidays", json={"date": MONDAY, "label": "Pride"})
    assert r.status_code == 201
    holiday_id = r.json()["id"]

    r = await client.post(f"/api/v1/dashboard/businesses/{bid}/holidays", json={"date": MONDAY})
    assert r.status_code == 422
    assert r.json()["field"] == "date"

    r = await client.get(f"/api/v1/businesses/{bid}/availability", params={"date": MONDAY})
    body = r.json()
    assert body["slots"] == []
    assert body["closed_reason"] == "holiday"
    assert body["holiday_label"] == "Pride"

    r = await client.delete(f"/api/v1/dashboard/businesses/{bid}/holidays/{holiday_id}")
    assert r.status_code == 204
    r = await client.get(f"/api/v1/businesses/{bid}/holidays")
    assert r.json() == []


async def test_blocked_slot_endpoints(client, make_business):
    business = await make_business()
    bid = business.id
    await configure(client, bid)

    r = await client.post(
        f"/api/v1/dashboard/businesses/{bid}/blocked-slots",
        json={"date": MONDAY, "start_time": "09:00", "end_time": "10:30", "reason": "Deep clean"},
    )
    assert r.status_code == 201
    slot_id = r.json()["id"]

    r = await client.get(f"/api/v1/businesses/{bid}/availability", params={"date": MONDAY})
    assert r.json()["slots"] == ["10:30", "11:00", "11:30"]

    r = await client.get(
        f"/api/v1/dashboard/businesses/{bid}/blocked-slots",
        params={"start_date": MONDAY, "end_date": MONDAY},
    )
    assert [s["id"] for s in r.json()] == [slot_id]

    r = await client.delete(f"/api/v1/dashboard/businesses/{bid}/blocked-slots/{slot_id}")
    assert r.status_code == 204
    r = await client.delete(f"/api/v1/dashboard/businesses/{bid}/blocked-slots/{slot_id}")
    assert r.status_code == 404
    assert r.json()["error"] == "NOT_FOUND"


async def test_booking_lifecycle(client, notifier, make_business):
    business = await make_business(slot_duration=60)
    bid = str(business.id)
    await configure(client, bid)

    r = await client.post("/api/v1/bookings", json={
        "user_id": "user-1", "business_id": bid, "date": MONDAY, "time": "10:00",
        "customer_name": "Noor", "customer_phone": "+4915100000000",
    })
    assert r.status_code == 201
    booking = r.json()
    assert booking["status"] == "pending"
    assert booking["end_time"] == "11:00"

    r = await client.post("/api/v1/bookings", json={
        "user_id": "user-2", "business_id": bid, "date": MONDAY, "time": "10:00",
    })
    assert r.status_code == 409
    assert r.json() == {"error": "SLOT_TAKEN", "detail": "This time slot is not available", "field": "time"}

    r = await client.get(f"/api/v1/businesses/{bid}/booked-slots/{MONDAY}")
    assert r.json()["booked_slots"] == ["10:00"]

    r = await client.patch(f"/api/v1/dashboard/bookings/{booking['id']}/status", json={"status": "confirmed"})
    assert r.status_code == 200
    assert r.json()["status"] == "confirmed"

    r = await client.patch(f"/api/v1/bookings/{booking['id']}/cancel", json={"user_id": "user-2"})
    assert r.status_code == 403
    assert r.json()["error"] == "FORBIDDEN"

    r = await client.patch(f"/api/v1/bookings/{booking['id']}/cancel", json={"user_id": "user-1"})
    assert r.status_code == 200
    assert r.json()["status"] == "cancelled"

    r = await client.patch(f"/api/v1/dashboard/bookings/{booking['id']}/status", json={"status": "confirmed"})
    assert r.status_code == 409
    assert r.json()["error"] == "INVALID_TRANSITION"

    r = await client.get(f"/api/v1/businesses/{bid}/availability", params={"date": MONDAY})
    assert "10:00" in r.json()["slots"]

    r = await client.get(f"/api/v1/dashboard/businesses/{bid}/bookings", params={"status": "cancelled"})
    assert r.json()["total"] == 1

    assert notifier.types() == ["booking.created", "booking.confirmed", "booking.cancelled"]


async def test_booking_on_closed_day(client, make_business):
    business = await make_business()
    await configure(client, business.id)

    r = await client.post("/api/v1/bookings", json={
        "user_id": "user-1", "business_id": str(business.id), "date": "2024-06-09", "time": "10:00",
    })

    assert r.status_code == 409
    assert r.json()["error"] == "BUSINESS_CLOSED"


async def test_validation_errors_use_engine_error_body(client, make_business):
    business = await make_business()
    bid = business.id

    r = await client.get(f"/api/v1/businesses/{bid}/availability", params={"date": "tomorrow"})
    assert r.status_code == 422
    assert r.json()["error"] == "INVALID_INPUT"
    assert r.json()["field"] == "date"

    r = await client.post("/api/v1/bookings", json={
        "user_id": "user-1", "business_id": str(bid), "date": MONDAY, "time": "9am",
    })
    assert r.status_code == 422
    assert r.json()["field"] == "time"

    r = await client.put(f"/api/v1/dashboard/businesses/{bid}/hours", json={"hours": [
        {"day_of_week": 1, "open_time": "09:00", "close_time": "17:00"},
        {"day_of_week": 1, "open_time": "10:00", "close_time": "12:00"},
    ]})
    assert r.status_code == 422
    assert r.json()["error"] == "INVALID_INPUT"

    r = await client.post(
        f"/api/v1/dashboard/businesses/{bid}/breaks",
        json={"day_of_week": 1, "start_time": "12:00", "end_time": "11:00"},
    )
    assert r.status_code == 422


async def test_unknown_resources(client):
    missing = uuid.uuid4()

    r = await client.get(f"/api/v1/businesses/{missing}/availability", params={"date": MONDAY})
    assert r.status_code == 404
    assert r.json() == {"error": "NOT_FOUND", "detail": "Business not found", "field": "business_id"}

    r = await client.get(f"/api/v1/bookings/{missing}")
    assert r.status_code == 404


async def test_customer_booking_history(client, make_business):
    business = await make_business(slot_duration=60, name="Studio Nord")
    bid = str(business.id)
    await configure(client, bid)

    for user, time in (("user-1", "09:00"), ("user-1", "11:00"), ("user-2", "10:00")):
        r = await client.post("/api/v1/bookings", json={
            "user_id": user, "business_id": bid, "date": MONDAY, "time": time,
        })
        assert r.status_code == 201

    r = await client.get("/api/v1/bookings", params={"user_id": "user-1"})
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 2
    assert [b["time"] for b in body["bookings"]] == ["11:00", "09:00"]
    assert body["bookings"][0]["business"]["name"] == "Studio Nord"
    assert body["bookings"][0]["business"]["id"] == bid

    r = await client.patch(f"/api/v1/bookings/{body['bookings'][1]['id']}/cancel", json={"user_id": "user-1"})
    assert r.status_code == 200

    r = await client.get("/api/v1/bookings", params={"user_id": "user-1", "status": "cancelled"})
    assert [b["time"] for b in r.json()["bookings"]] == ["09:00"]

    r = await client.get("/api/v1/bookings", params={"user_id": "user-1", "status": "archived"})
    assert r.status_code == 422
    assert r.json()["field"] == "status"

    r = await client.get("/api/v1/bookings")
    assert r.status_code == 422
