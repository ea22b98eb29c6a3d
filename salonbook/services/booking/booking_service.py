# salonbook/services/booking/booking_service.py
"""
Booking acceptance guard and booking status machine.

submit_booking re-validates the requested slot against live availability for
a fast rejection, then hands the insert to the commitment ledger, which is
what actually prevents two active bookings on one slot.
"""
from datetime import date
from typing import Any, Dict, FrozenSet, List, Optional, Union
from uuid import UUID
import logging

from salonbook.core.exceptions import (
    BusinessClosedError,
    ForbiddenError,
    InvalidStatusTransitionError,
    SlotUnavailableError,
    ValidationError,
)
from salonbook.models.booking import Booking, BookingStatus
from salonbook.services.availability.availability_service import CLOSED_HOLIDAY, AvailabilityService
from salonbook.services.booking.commitment_ledger import CommitmentLedger
from salonbook.services.notification.notification_service import NotificationDispatcher
from salonbook.services.schedule.schedule_store import ScheduleStore
from salonbook.utils.time_utils import add_minutes, normalize_time, parse_date
from salonbook.utils.validators import parse_uuid, require_text

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    BookingStatus.PENDING.value: frozenset({BookingStatus.CONFIRMED.value, BookingStatus.CANCELLED.value}),
    BookingStatus.CONFIRMED.value: frozenset({BookingStatus.COMPLETED.value, BookingStatus.CANCELLED.value}),
    BookingStatus.COMPLETED.value: frozenset(),
    BookingStatus.CANCELLED.value: frozenset(),
}


class BookingService:
    """Accepts new bookings and moves existing ones through their lifecycle"""

    def __init__(
            self,
            store: ScheduleStore,
            ledger: CommitmentLedger,
            availability: AvailabilityService,
            notifier: NotificationDispatcher
    ):
        self.store = store
        self.ledger = ledger
        self.availability = availability
        self.notifier = notifier

    async def submit_booking(
            self,
            user_id: str,
            business_id: Union[str, UUID],
            day: Union[str, date],
            time: str,
            employee_id: Union[str, UUID, None] = None,
            service_id: Union[str, UUID, None] = None,
            notes: Optional[str] = None,
            customer_name: Optional[str] = None,
            customer_email: Optional[str] = None,
            customer_phone: Optional[str] = None
    ) -> Booking:
        """
        Create a pending booking for an offered slot.

        Raises:
            ValidationError: malformed input, inactive business/employee/service
            NotFoundError: unknown business
            BusinessClosedError: holiday or closed weekday
            SlotUnavailableError: slot occupied, not offered, or lost to a concurrent booking
        """
        user_id = require_text(user_id, "user_id", max_length=64)
        business_id = parse_uuid(business_id, "business_id")
        target = parse_date(day)
        slot = normalize_time(time)
        employee_id = parse_uuid(employee_id, "employee_id", required=False)
        service_id = parse_uuid(service_id, "service_id", required=False)

        business = await self.store.require_business(business_id)
        if not business.is_active:
            raise ValidationError("Business is not accepting bookings", field="business_id")

        if employee_id:
            employee = await self.store.get_employee(employee_id)
            if not employee or employee.business_id != business_id or not employee.is_active:
                raise ValidationError("Employee not available for this business", field="employee_id")

        duration = self.availability.slot_duration_for(business)
        if service_id:
            service = await self.store.get_service(service_id)
            if not service or service.business_id != business_id or not service.is_active:
                raise ValidationError("Service not available for this business", field="service_id")
            duration = service.duration or duration

        availability = await self.availability.resolve_available_slots(business_id, target, employee_id)
        if availability.is_closed:
            message = "Business is closed on this date"
            if availability.closed_reason == CLOSED_HOLIDAY and availability.holiday_label:
                message = f"Business is closed on this date ({availability.holiday_label})"
            logger.info(f"Rejected booking for business {business_id} on {target}: {availability.closed_reason}")
            raise BusinessClosedError(message, reason=availability.closed_reason)

        if slot not in availability.slots:
            logger.info(f"Rejected booking for business {business_id} at {target} {slot}: slot not offered")
            raise SlotUnavailableError("This time slot is not available")

        booking = Booking(
            user_id=user_id,
            business_id=business_id,
            employee_id=employee_id,
            service_id=service_id,
            booking_date=target,
            booking_time=slot,
            end_time=add_minutes(slot, duration),
            status=BookingStatus.PENDING.value,
            notes=notes,
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
        )

        try:
            booking = await self.ledger.insert_booking_if_free(booking)
        except SlotUnavailableError:
            logger.warning(f"Slot {target} {slot} for business {business_id} was taken concurrently")
            raise

        logger.info(f"Accepted booking {booking.id} for business {business_id} at {target} {slot}")
        self._notify("booking.created", booking)
        return booking

    async def get_booking(self, booking_id: Union[str, UUID]) -> Booking:
        return await self.ledger.get_booking(parse_uuid(booking_id, "booking_id"))

    async def cancel_booking(self, booking_id: Union[str, UUID], user_id: str) -> Booking:
        """Customer-side cancellation; only the booking's owner may cancel"""
        user_id = require_text(user_id, "user_id", max_length=64)
        booking = await self.get_booking(booking_id)
        if booking.user_id != user_id:
            raise ForbiddenError("You can only cancel your own bookings", field="user_id")

        return await self._transition(booking, BookingStatus.CANCELLED.value)

    async def update_status(self, booking_id: Union[str, UUID], status: str) -> Booking:
        """Owner-side status change along the allowed transitions"""
        if status not in ALLOWED_TRANSITIONS:
            raise ValidationError(f"Invalid status '{status}'", field="status")

        booking = await self.get_booking(booking_id)
        return await self._transition(booking, status)

    async def list_bookings(
            self,
            business_id: Union[str, UUID],
            day: Union[str, date, None] = None,
            status: Optional[str] = None
    ):
        business_id = parse_uuid(business_id, "business_id")
        target = parse_date(day) if day else None
        if status and status not in ALLOWED_TRANSITIONS:
            raise ValidationError(f"Invalid status '{status}'", field="status")

        await self.store.require_business(business_id)
        return await self.ledger.list_bookings(business_id, target, status)

    async def list_user_bookings(self, user_id: str, status: Optional[str] = None) -> List[Dict[str, Any]]:
        """Bookings made by one customer, each with a summary of its business"""
        user_id = require_text(user_id, "user_id", max_length=64)
        if status and status not in ALLOWED_TRANSITIONS:
            raise ValidationError(f"Invalid status '{status}'", field="status")

        rows = await self.ledger.list_user_bookings(user_id, status)
        return [{**booking.to_dict(), "business": business.to_dict()} for booking, business in rows]

    async def _transition(self, booking: Booking, status: str) -> Booking:
        current = booking.status
        if status not in ALLOWED_TRANSITIONS.get(current, frozenset()):
            logger.warning(f"Refused status change {current} -> {status} for booking {booking.id}")
            raise InvalidStatusTransitionError(current, status)

        booking = await self.ledger.save_status(booking, status)
        logger.info(f"Booking {booking.id} moved {current} -> {status}")
        self._notify(f"booking.{status}", booking)
        return booking

    def _notify(self, event_type: str, booking: Booking) -> None:
        try:
            self.notifier.booking_event(event_type, booking)
        except Exception as e:
            logger.error(f"Failed to dispatch {event_type} for booking {booking.id}: {e}")
