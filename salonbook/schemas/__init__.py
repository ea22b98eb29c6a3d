# salonbook/schemas/__init__.py
from .availability import (
    AvailabilityResponse,
    BookedSlotsResponse
)

from .booking import (
    BookingCreate,
    BookingCancel,
    BookingStatusUpdate,
    BookingResponse,
    BookingListResponse,
    UserBookingResponse,
    UserBookingListResponse
)

from .schedule import (
    BusinessHoursInput,
    BusinessHoursUpdate,
    BusinessHoursResponse,
    BreakCreate,
    BreakResponse,
    HolidayCreate,
    HolidayResponse,
    BlockedSlotCreate,
    BlockedSlotResponse
)
