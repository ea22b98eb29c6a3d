# salonbook/utils/time_utils.py
"""Time-of-day arithmetic on "HH:MM" strings, done in minutes since midnight"""
from datetime import date, datetime
from typing import Iterator, Optional, Union

from salonbook.core.exceptions import ValidationError

MINUTES_PER_DAY = 24 * 60


def parse_time(value: Optional[str], field: str = "time") -> int:
    """Parse "HH:MM" (or "HH:MM:SS") into minutes since midnight"""
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{field} is required in HH:MM format", field=field)

    parts = value.strip().split(":")
    if len(parts) not in (2, 3) or not all(p.isascii() and p.isdigit() and len(p) == 2 for p in parts):
        raise ValidationError(f"Invalid {field} '{value}', use HH:MM", field=field)

    hours, minutes = int(parts[0]), int(parts[1])
    if hours > 23 or minutes > 59 or (len(parts) == 3 and int(parts[2]) > 59):
        raise ValidationError(f"Invalid {field} '{value}', use HH:MM", field=field)

    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    """Render minutes since midnight as "HH:MM" """
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_time(value: Optional[str], field: str = "time") -> str:
    """Validate a time-of-day string and return it as HH:MM"""
    return format_minutes(parse_time(value, field))


def add_minutes(value: str, minutes: int) -> str:
    """Shift a time of day, clamping at 23:59 instead of wrapping past midnight"""
    return format_minutes(min(parse_time(value) + minutes, MINUTES_PER_DAY - 1))


def parse_date(value: Union[str, date, None], field: str = "date") -> date:
    """Parse an ISO YYYY-MM-DD date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{field} is required in YYYY-MM-DD format", field=field)
    if not value.isascii():
        raise ValidationError(f"Invalid {field} '{value}', use YYYY-MM-DD", field=field)
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid {field} '{value}', use YYYY-MM-DD", field=field)


def day_of_week(day: date) -> int:
    """Weekday number with Sunday=0 ... Saturday=6"""
    return (day.weekday() + 1) % 7


def step_minutes(start: int, end: int, step: int) -> Iterator[int]:
    """Yield start, start+step, ... while strictly before end and before midnight"""
    if step <= 0:
        raise ValidationError("Slot duration must be a positive number of minutes", field="slot_duration")

    current = start
    while current < end and current < MINUTES_PER_DAY:
        yield current
        current += step
