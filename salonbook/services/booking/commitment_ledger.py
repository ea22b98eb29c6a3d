# salonbook/services/booking/commitment_ledger.py
"""
Commitment ledger: active bookings and blocked ranges.

insert_booking_if_free is the only write path for new bookings. It runs the
conflict check and the insert in one transaction that is serialized per slot,
and the partial unique index uq_bookings_active_slot rejects whatever slips
past the check.
"""
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple
from uuid import UUID
import logging

from sqlalchemy import or_, select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.core.exceptions import NotFoundError, SlotUnavailableError
from salonbook.models.booking import ACTIVE_STATUSES, Booking, BookingStatus
from salonbook.models.business import Business
from salonbook.models.schedule import BlockedSlot
from salonbook.services.storage import storage_errors

logger = logging.getLogger(__name__)


def _employee_scope(column, employee_id: Optional[UUID]):
    """
    Rows that count for the given employee view.

    No employee means the business-wide view where every row counts. For a
    concrete employee, that employee's rows count together with unassigned
    ones: an unassigned booking or block occupies the slot for every employee.
    """
    if employee_id is None:
        return None
    return or_(column == employee_id, column.is_(None))


class CommitmentLedger:
    """Storage-backed view of what is already taken on a given day"""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------
    # Reads used by the availability resolver
    # ------------------------------------------------------------------

    async def get_active_booking_times(
            self,
            business_id: UUID,
            day: date,
            employee_id: Optional[UUID] = None
    ) -> List[str]:
        """Start times of pending/confirmed bookings, sorted"""
        query = select(Booking.booking_time).where(
            Booking.business_id == business_id,
            Booking.booking_date == day,
            Booking.status.in_(ACTIVE_STATUSES),
        )
        scope = _employee_scope(Booking.employee_id, employee_id)
        if scope is not None:
            query = query.where(scope)

        async with storage_errors(self.db, "load booked slots"):
            result = await self.db.execute(query)
        return sorted(set(result.scalars().all()))

    async def get_blocked_ranges(
            self,
            business_id: UUID,
            day: date,
            employee_id: Optional[UUID] = None
    ) -> List[Tuple[str, str]]:
        query = select(BlockedSlot.start_time, BlockedSlot.end_time).where(
            BlockedSlot.business_id == business_id,
            BlockedSlot.date == day,
        )
        scope = _employee_scope(BlockedSlot.employee_id, employee_id)
        if scope is not None:
            query = query.where(scope)

        async with storage_errors(self.db, "load blocked slots"):
            result = await self.db.execute(query.order_by(BlockedSlot.start_time))
        return [(row.start_time, row.end_time) for row in result.all()]

    # ------------------------------------------------------------------
    # Atomic booking insert
    # ------------------------------------------------------------------

    async def insert_booking_if_free(self, booking: Booking) -> Booking:
        """
        Persist a booking unless its slot is occupied.

        Raises SlotUnavailableError when another active booking already holds
        the slot, including the case where a concurrent request commits first.
        Nothing is left behind on failure.
        """
        booking.employee_key = Booking.employee_key_for(booking.employee_id)
        # rollback expires loaded instances; log from plain values only
        business_id, day, slot = booking.business_id, booking.booking_date, booking.booking_time

        try:
            async with storage_errors(self.db, "save booking"):
                await self._lock_slot(business_id, day, slot)

                if await self._has_conflict(booking):
                    await self.db.rollback()
                    raise SlotUnavailableError()

                self.db.add(booking)
                await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            logger.warning(
                f"Unique slot constraint rejected booking for business {business_id} at {day} {slot}"
            )
            raise SlotUnavailableError() from exc

        await self.db.refresh(booking)
        return booking

    async def _lock_slot(self, business_id: UUID, day: date, slot: str) -> None:
        """Serialize writers of one slot until the transaction ends"""
        if self.db.get_bind().dialect.name == "postgresql":
            await self.db.execute(
                text("SELECT pg_advisory_xact_lock(hashtext(:key))"),
                {"key": f"{business_id}:{day.isoformat()}:{slot}"},
            )
        # SQLite transactions start with BEGIN IMMEDIATE and already hold the write lock

    async def _has_conflict(self, booking: Booking) -> bool:
        query = select(Booking.id).where(
            Booking.business_id == booking.business_id,
            Booking.booking_date == booking.booking_date,
            Booking.booking_time == booking.booking_time,
            Booking.status.in_(ACTIVE_STATUSES),
        )
        scope = _employee_scope(Booking.employee_id, booking.employee_id)
        if scope is not None:
            query = query.where(scope)

        result = await self.db.execute(query.limit(1))
        return result.first() is not None

    # ------------------------------------------------------------------
    # Booking lookups and status updates
    # ------------------------------------------------------------------

    async def get_booking(self, booking_id: UUID) -> Booking:
        async with storage_errors(self.db, "load booking"):
            booking = await self.db.get(Booking, booking_id)
        if not booking:
            raise NotFoundError("Booking not found", field="booking_id")
        return booking

    async def list_bookings(
            self,
            business_id: UUID,
            day: Optional[date] = None,
            status: Optional[str] = None
    ) -> List[Booking]:
        query = select(Booking).where(Booking.business_id == business_id)
        if day:
            query = query.where(Booking.booking_date == day)
        if status:
            query = query.where(Booking.status == status)

        async with storage_errors(self.db, "list bookings"):
            result = await self.db.execute(
                query.order_by(Booking.booking_date, Booking.booking_time)
            )
        return list(result.scalars().all())

    async def list_user_bookings(
            self,
            user_id: str,
            status: Optional[str] = None
    ) -> List[Tuple[Booking, Business]]:
        """A customer's bookings with their business, newest slot first"""
        query = (
            select(Booking, Business)
            .join(Business, Booking.business_id == Business.id)
            .where(Booking.user_id == user_id)
        )
        if status:
            query = query.where(Booking.status == status)

        async with storage_errors(self.db, "list user bookings"):
            result = await self.db.execute(
                query.order_by(Booking.booking_date.desc(), Booking.booking_time.desc())
            )
        return [(row.Booking, row.Business) for row in result.all()]

    async def save_status(self, booking: Booking, status: str) -> Booking:
        booking.status = status
        if status == BookingStatus.CANCELLED.value:
            booking.cancelled_at = datetime.now(timezone.utc)

        async with storage_errors(self.db, "update booking status"):
            await self.db.commit()
            await self.db.refresh(booking)
        return booking

    # ------------------------------------------------------------------
    # Blocked slots (owner dashboard)
    # ------------------------------------------------------------------

    async def list_blocked_slots(
            self,
            business_id: UUID,
            start_date: Optional[date] = None,
            end_date: Optional[date] = None
    ) -> List[BlockedSlot]:
        query = select(BlockedSlot).where(BlockedSlot.business_id == business_id)
        if start_date:
            query = query.where(BlockedSlot.date >= start_date)
        if end_date:
            query = query.where(BlockedSlot.date <= end_date)

        async with storage_errors(self.db, "list blocked slots"):
            result = await self.db.execute(
                query.order_by(BlockedSlot.date, BlockedSlot.start_time)
            )
        return list(result.scalars().all())

    async def create_blocked_slot(
            self,
            business_id: UUID,
            day: date,
            start_time: str,
            end_time: str,
            employee_id: Optional[UUID] = None,
            reason: Optional[str] = None
    ) -> BlockedSlot:
        blocked = BlockedSlot(
            business_id=business_id,
            employee_id=employee_id,
            date=day,
            start_time=start_time,
            end_time=end_time,
            reason=reason,
        )
        async with storage_errors(self.db, "block slot"):
            self.db.add(blocked)
            await self.db.commit()
            await self.db.refresh(blocked)

        logger.info(f"Blocked {day.isoformat()} {start_time}-{end_time} for business {business_id}")
        return blocked

    async def delete_blocked_slot(self, business_id: UUID, slot_id: UUID) -> None:
        async with storage_errors(self.db, "delete blocked slot"):
            blocked = await self.db.get(BlockedSlot, slot_id)
            if not blocked or blocked.business_id != business_id:
                raise NotFoundError("Blocked slot not found", field="slot_id")
            await self.db.delete(blocked)
            await self.db.commit()
