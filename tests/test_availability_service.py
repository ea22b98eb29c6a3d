from datetime import date

import pytest

from salonbook.core.exceptions import NotFoundError, ValidationError
from salonbook.models import Booking, BlockedSlot
from salonbook.services.availability.availability_service import (
    CLOSED_HOLIDAY,
    CLOSED_WEEKLY,
    BusinessDefaults,
)

from conftest import MONDAY

WEEKDAYS_9_TO_17 = {day: ("09:00", "17:00") for day in range(1, 6)}


async def add_booking(db, business, time, status="pending", employee_id=None, day=date(2024, 6, 10)):
    booking = Booking(
        user_id="someone",
        business_id=business.id,
        employee_id=employee_id,
        employee_key=Booking.employee_key_for(employee_id),
        booking_date=day,
        booking_time=time,
        status=status,
    )
    db.add(booking)
    await db.commit()
    return booking


async def test_open_day_lists_every_hourly_slot(services, make_business):
    business = await make_business(hours=WEEKDAYS_9_TO_17, slot_duration=60)

    result = await services.availability.resolve_available_slots(business.id, MONDAY)

    assert result.slots == ["09:00", "10:00", "11:00", "12:00", "13:00", "14:00", "15:00", "16:00"]
    assert result.closed_reason is None
    assert result.slot_duration == 60


async def test_holiday_closes_the_day(services, make_business):
    business = await make_business(
        hours=WEEKDAYS_9_TO_17,
        holidays=[(date(2024, 12, 25), "Christmas")],
    )

    result = await services.availability.resolve_available_slots(business.id, "2024-12-25")

    assert result.slots == []
    assert result.closed_reason == CLOSED_HOLIDAY
    assert result.holiday_label == "Christmas"
    assert result.is_closed


async def test_closed_weekday_yields_nothing(services, make_business):
    business = await make_business(hours={**WEEKDAYS_9_TO_17, 6: None})

    result = await services.availability.resolve_available_slots(business.id, "2024-06-15")  # Saturday

    assert result.slots == []
    assert result.closed_reason == CLOSED_WEEKLY


async def test_confirmed_booking_removes_only_its_slot(db, services, make_business):
    business = await make_business(hours=WEEKDAYS_9_TO_17, slot_duration=60)
    await add_booking(db, business, "11:00", status="confirmed")

    result = await services.availability.resolve_available_slots(business.id, MONDAY)

    assert result.slots == ["09:00", "10:00", "12:00", "13:00", "14:00", "15:00", "16:00"]


async def test_break_excludes_covered_starts(services, make_business):
    business = await make_business(
        hours={1: ("09:00", "12:00")},
        slot_duration=30,
        breaks=[(1, "10:00", "10:30")],
    )

    result = await services.availability.resolve_available_slots(business.id, MONDAY)

    assert "10:00" not in result.slots
    assert "09:30" in result.slots
    assert "10:30" in result.slots
    assert result.slots == ["09:00", "09:30", "10:30", "11:00", "11:30"]


async def test_break_on_another_weekday_is_ignored(services, make_business):
    business = await make_business(hours={1: ("09:00", "11:00")}, breaks=[(2, "09:00", "10:00")])

    result = await services.availability.resolve_available_slots(business.id, MONDAY)

    assert result.slots == ["09:00", "09:30", "10:00", "10:30"]


async def test_cancelled_and_completed_bookings_release_the_slot(db, services, make_business):
    business = await make_business(hours={1: ("09:00", "11:00")})
    await add_booking(db, business, "09:00", status="cancelled")
    await add_booking(db, business, "09:30", status="completed")
    await add_booking(db, business, "10:00", status="pending")

    result = await services.availability.resolve_available_slots(business.id, MONDAY)

    assert result.slots == ["09:00", "09:30", "10:30"]


async def test_blocked_range_removes_covered_slots(db, services, make_business):
    business = await make_business(hours={1: ("09:00", "12:00")})
    db.add(BlockedSlot(business_id=business.id, date=date(2024, 6, 10), start_time="10:00", end_time="11:00"))
    await db.commit()

    result = await services.availability.resolve_available_slots(business.id, MONDAY)

    assert result.slots == ["09:00", "09:30", "11:00", "11:30"]


async def test_employee_view_counts_own_and_unassigned_commitments(db, services, make_business):
    business = await make_business(hours={1: ("09:00", "11:00")}, employees=["Ana", "Ben"])
    ana, ben = business.staff
    await add_booking(db, business, "09:00", employee_id=ana.id)
    await add_booking(db, business, "09:30", employee_id=ben.id)
    await add_booking(db, business, "10:00")  # any employee
    db.add(BlockedSlot(
        business_id=business.id, employee_id=ben.id,
        date=date(2024, 6, 10), start_time="10:30", end_time="11:00",
    ))
    await db.commit()

    for_ana = await services.availability.resolve_available_slots(business.id, MONDAY, ana.id)
    for_ben = await services.availability.resolve_available_slots(business.id, MONDAY, ben.id)
    business_wide = await services.availability.resolve_available_slots(business.id, MONDAY)

    assert for_ana.slots == ["09:30", "10:30"]
    assert for_ben.slots == ["09:00"]
    assert business_wide.slots == []


async def test_defaults_apply_without_configuration(services, make_business):
    business = await make_business(slot_duration=None)

    monday = await services.availability.resolve_available_slots(business.id, MONDAY)
    sunday = await services.availability.resolve_available_slots(business.id, "2024-06-09")

    assert monday.slot_duration == 30
    assert monday.slots[0] == "09:00"
    assert monday.slots[-1] == "17:30"
    assert len(monday.slots) == 18
    assert sunday.slots == []
    assert sunday.closed_reason == CLOSED_WEEKLY


async def test_business_level_hours_override_defaults(services, make_business):
    business = await make_business(slot_duration=45, open_time="10:00", close_time="12:00")

    result = await services.availability.resolve_available_slots(business.id, MONDAY)

    assert result.slots == ["10:00", "10:45", "11:30"]


async def test_injected_defaults_are_used(db, notifier, make_business):
    from conftest import build_services

    custom = BusinessDefaults(open_time="08:00", close_time="10:00", slot_duration=60, closed_days=frozenset())
    services = build_services(db, notifier, custom)
    business = await make_business(slot_duration=None)

    result = await services.availability.resolve_available_slots(business.id, "2024-06-09")

    assert result.slots == ["08:00", "09:00"]


async def test_open_not_before_close_is_treated_as_closed(services, make_business):
    business = await make_business(hours={1: ("12:00", "12:00")})

    result = await services.availability.resolve_available_slots(business.id, MONDAY)

    assert result.slots == []
    assert result.closed_reason == CLOSED_WEEKLY


async def test_unknown_business_and_bad_date(services, make_business):
    import uuid

    business = await make_business()

    with pytest.raises(NotFoundError):
        await services.availability.resolve_available_slots(uuid.uuid4(), MONDAY)

    with pytest.raises(ValidationError) as exc:
        await services.availability.resolve_available_slots(business.id, "June 10")
    assert exc.value.field == "date"


async def test_booked_slots_lists_active_times(db, services, make_business):
    business = await make_business(hours={1: ("09:00", "12:00")})
    await add_booking(db, business, "11:00")
    await add_booking(db, business, "09:30", status="confirmed")
    await add_booking(db, business, "10:00", status="cancelled")

    assert await services.availability.booked_slots(business.id, MONDAY) == ["09:30", "11:00"]
