# ============================================================================
# FILE: salonbook/api/dependencies.py
# Service wiring for the request handlers; one DB session per request
# ============================================================================
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.config.database import get_db
from salonbook.services.availability.availability_service import AvailabilityService, BusinessDefaults
from salonbook.services.booking.booking_service import BookingService
from salonbook.services.booking.commitment_ledger import CommitmentLedger
from salonbook.services.notification.notification_service import NotificationDispatcher, get_dispatcher
from salonbook.services.schedule.schedule_store import ScheduleStore


@lru_cache()
def get_business_defaults() -> BusinessDefaults:
    return BusinessDefaults.from_settings()


@lru_cache()
def get_notifier() -> NotificationDispatcher:
    return get_dispatcher()


def get_store(db: AsyncSession = Depends(get_db)) -> ScheduleStore:
    return ScheduleStore(db)


def get_ledger(db: AsyncSession = Depends(get_db)) -> CommitmentLedger:
    return CommitmentLedger(db)


def get_availability_service(
        store: ScheduleStore = Depends(get_store),
        ledger: CommitmentLedger = Depends(get_ledger),
        defaults: BusinessDefaults = Depends(get_business_defaults)
) -> AvailabilityService:
    return AvailabilityService(store, ledger, defaults)


def get_booking_service(
        store: ScheduleStore = Depends(get_store),
        ledger: CommitmentLedger = Depends(get_ledger),
        availability: AvailabilityService = Depends(get_availability_service),
        notifier: NotificationDispatcher = Depends(get_notifier)
) -> BookingService:
    return BookingService(store, ledger, availability, notifier)
