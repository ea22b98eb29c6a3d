# ===== salonbook/services/availability/availability_service.py =====
from dataclasses import dataclass, field
from datetime import date
from typing import FrozenSet, List, Optional, Union
from uuid import UUID
import logging

from salonbook.config.settings import Settings, get_settings
from salonbook.models.business import Business, BusinessHours
from salonbook.services.availability.slot_generator import covered_slot_starts, generate_candidate_slots
from salonbook.services.booking.commitment_ledger import CommitmentLedger
from salonbook.services.schedule.schedule_store import ScheduleStore
from salonbook.utils.time_utils import day_of_week, parse_date, parse_time

logger = logging.getLogger(__name__)

CLOSED_HOLIDAY = "holiday"
CLOSED_WEEKLY = "weekly-closed"


@dataclass(frozen=True)
class BusinessDefaults:
    """Fallbacks for businesses with incomplete schedule configuration"""
    open_time: str = "09:00"
    close_time: str = "18:00"
    slot_duration: int = 30
    closed_days: FrozenSet[int] = frozenset({0})  # Sunday

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "BusinessDefaults":
        settings = settings or get_settings()
        return cls(
            open_time=settings.DEFAULT_OPEN_TIME,
            close_time=settings.DEFAULT_CLOSE_TIME,
            slot_duration=settings.DEFAULT_SLOT_DURATION,
        )


@dataclass
class DayHours:
    open_time: str
    close_time: str
    is_closed: bool


@dataclass
class AvailabilityResult:
    business_id: UUID
    date: date
    employee_id: Optional[UUID]
    slot_duration: int
    slots: List[str] = field(default_factory=list)
    closed_reason: Optional[str] = None
    holiday_label: Optional[str] = None

    @property
    def is_closed(self) -> bool:
        return self.closed_reason is not None

    def to_dict(self):
        return {
            "business_id": str(self.business_id),
            "date": self.date.isoformat(),
            "employee_id": str(self.employee_id) if self.employee_id else None,
            "slot_duration": self.slot_duration,
            "slots": self.slots,
            "closed_reason": self.closed_reason,
            "holiday_label": self.holiday_label,
        }


class AvailabilityService:
    """Resolves bookable slot starts for a business, date and optional employee"""

    def __init__(
            self,
            store: ScheduleStore,
            ledger: CommitmentLedger,
            defaults: Optional[BusinessDefaults] = None
    ):
        self.store = store
        self.ledger = ledger
        self.defaults = defaults or BusinessDefaults.from_settings()

    def slot_duration_for(self, business: Business) -> int:
        return business.slot_duration or self.defaults.slot_duration

    def hours_for_day(self, business: Business, weekday: int, row: Optional[BusinessHours]) -> DayHours:
        """
        Effective hours for one weekday: the configured row, else the
        business-level open/close, else the global defaults.
        """
        if row is not None:
            return DayHours(row.open_time, row.close_time, bool(row.is_closed))

        return DayHours(
            open_time=business.open_time or self.defaults.open_time,
            close_time=business.close_time or self.defaults.close_time,
            is_closed=weekday in self.defaults.closed_days,
        )

    async def resolve_available_slots(
            self,
            business_id: UUID,
            day: Union[str, date],
            employee_id: Optional[UUID] = None
    ) -> AvailabilityResult:
        """
        Candidate slots minus breaks, active bookings and blocked ranges.

        Holidays and closed weekdays short-circuit to an empty result with a
        closed_reason. Raises ValidationError for a malformed date and
        NotFoundError for an unknown business.
        """
        target = parse_date(day)
        business = await self.store.require_business(business_id)
        duration = self.slot_duration_for(business)
        result = AvailabilityResult(
            business_id=business.id,
            date=target,
            employee_id=employee_id,
            slot_duration=duration,
        )

        holidays = await self.store.get_holidays(business.id, target, target)
        if holidays:
            result.closed_reason = CLOSED_HOLIDAY
            result.holiday_label = holidays[0].label
            return result

        weekday = day_of_week(target)
        weekly = await self.store.get_weekly_hours(business.id)
        hours = self.hours_for_day(business, weekday, weekly.get(weekday))
        if hours.is_closed or parse_time(hours.open_time, "open_time") >= parse_time(hours.close_time, "close_time"):
            result.closed_reason = CLOSED_WEEKLY
            return result

        candidates = generate_candidate_slots(hours.open_time, hours.close_time, duration)

        breaks = await self.store.get_breaks(business.id, weekday)
        occupied = covered_slot_starts(candidates, [(b.start_time, b.end_time) for b in breaks])

        occupied.update(await self.ledger.get_active_booking_times(business.id, target, employee_id))

        blocked = await self.ledger.get_blocked_ranges(business.id, target, employee_id)
        occupied.update(covered_slot_starts(candidates, blocked))

        result.slots = [slot for slot in candidates if slot not in occupied]
        logger.debug(
            f"Resolved {len(result.slots)}/{len(candidates)} free slots for business {business.id} on {target}"
        )
        return result

    async def booked_slots(
            self,
            business_id: UUID,
            day: Union[str, date],
            employee_id: Optional[UUID] = None
    ) -> List[str]:
        """Active booked slot starts only, without schedule filtering"""
        target = parse_date(day)
        business = await self.store.require_business(business_id)
        return await self.ledger.get_active_booking_times(business.id, target, employee_id)
