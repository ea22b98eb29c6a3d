from datetime import date, datetime

import pytest

from salonbook.core.exceptions import ValidationError
from salonbook.utils.time_utils import (
    add_minutes,
    day_of_week,
    format_minutes,
    normalize_time,
    parse_date,
    parse_time,
    step_minutes,
)
from salonbook.utils.validators import parse_uuid


def test_parse_time_accepts_hh_mm_and_seconds():
    assert parse_time("00:00") == 0
    assert parse_time("09:30") == 570
    assert parse_time("23:59:00") == 23 * 60 + 59


@pytest.mark.parametrize("value", [
    "9:00", "24:00", "12:60", "noon", "", None, "12-30", "12:30:99",
    "1\u00b2:00", "\u0661\u0660:\u0660\u0660",
])
def test_parse_time_rejects_malformed(value):
    with pytest.raises(ValidationError) as exc:
        parse_time(value, "open_time")
    assert exc.value.field == "open_time"
    assert exc.value.code == "INVALID_INPUT"


def test_format_and_normalize():
    assert format_minutes(545) == "09:05"
    assert normalize_time("14:15:00") == "14:15"


def test_add_minutes_clamps_before_midnight():
    assert add_minutes("10:30", 45) == "11:15"
    assert add_minutes("23:30", 60) == "23:59"


def test_parse_date():
    assert parse_date("2024-06-10") == date(2024, 6, 10)
    assert parse_date(datetime(2024, 6, 10, 8, 0)) == date(2024, 6, 10)
    with pytest.raises(ValidationError):
        parse_date("2024-13-01")
    with pytest.raises(ValidationError):
        parse_date("10/06/2024")
    with pytest.raises(ValidationError):
        parse_date("\u0662\u0660\u0662\u0664-06-10")


def test_day_of_week_starts_on_sunday():
    assert day_of_week(date(2024, 6, 9)) == 0  # Sunday
    assert day_of_week(date(2024, 6, 10)) == 1  # Monday
    assert day_of_week(date(2024, 6, 15)) == 6  # Saturday


def test_step_minutes_stops_before_end_and_midnight():
    assert list(step_minutes(540, 600, 20)) == [540, 560, 580]
    assert list(step_minutes(23 * 60, 24 * 60 + 30, 30)) == [1380, 1410]
    with pytest.raises(ValidationError) as exc:
        list(step_minutes(0, 60, 0))
    assert exc.value.field == "slot_duration"


def test_parse_uuid():
    assert parse_uuid(None, "employee_id", required=False) is None
    with pytest.raises(ValidationError):
        parse_uuid("not-a-uuid", "business_id")
    with pytest.raises(ValidationError):
        parse_uuid(None, "business_id")
