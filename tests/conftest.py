import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./.pytest-salonbook.db"
os.environ["NOTIFICATIONS_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient

from salonbook.api.dependencies import get_business_defaults, get_notifier
from salonbook.config.database import build_engine, build_sessionmaker, create_tables, get_db
from salonbook.main import create_app
from salonbook.models import Business, BusinessBreak, BusinessHoliday, BusinessHours, Employee, Service
from salonbook.services.availability.availability_service import AvailabilityService, BusinessDefaults
from salonbook.services.booking.booking_service import BookingService
from salonbook.services.booking.commitment_ledger import CommitmentLedger
from salonbook.services.notification.notification_service import RecordingNotificationDispatcher
from salonbook.services.schedule.schedule_store import ScheduleStore

MONDAY = "2024-06-10"


def build_services(session, notifier, defaults):
    store = ScheduleStore(session)
    ledger = CommitmentLedger(session)
    availability = AvailabilityService(store, ledger, defaults)
    return SimpleNamespace(
        store=store,
        ledger=ledger,
        availability=availability,
        bookings=BookingService(store, ledger, availability, notifier),
    )


@pytest.fixture()
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'salonbook.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return build_sessionmaker(engine)


@pytest.fixture()
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture()
def notifier():
    return RecordingNotificationDispatcher()


@pytest.fixture()
def defaults():
    return BusinessDefaults()


@pytest.fixture()
def services(db, notifier, defaults):
    return build_services(db, notifier, defaults)


@pytest.fixture()
def make_business(session_factory):
    """
    Insert a business with its schedule and return it.
    hours maps day_of_week -> (open, close), or None for a closed day.
    """
    async def _make(
            hours=None,
            slot_duration=30,
            breaks=(),
            holidays=(),
            employees=(),
            services=(),
            **fields
    ):
        async with session_factory() as session:
            business = Business(name=fields.pop("name", "Salon Test"), slot_duration=slot_duration, **fields)
            session.add(business)
            await session.flush()

            for day, window in (hours or {}).items():
                session.add(BusinessHours(
                    business_id=business.id,
                    day_of_week=day,
                    open_time=window[0] if window else "00:00",
                    close_time=window[1] if window else "00:00",
                    is_closed=window is None,
                ))
            for day, start, end in breaks:
                session.add(BusinessBreak(business_id=business.id, day_of_week=day, start_time=start, end_time=end))
            for day, label in holidays:
                session.add(BusinessHoliday(business_id=business.id, date=day, label=label))

            business.staff = []
            for name in employees:
                employee = Employee(business_id=business.id, name=name)
                session.add(employee)
                business.staff.append(employee)

            business.catalog = []
            for name, duration in services:
                service = Service(business_id=business.id, name=name, duration=duration)
                session.add(service)
                business.catalog.append(service)

            await session.commit()
        return business

    return _make


@pytest.fixture()
def app(session_factory, notifier, defaults):
    app = create_app()

    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_business_defaults] = lambda: defaults
    return app


@pytest.fixture()
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
