# salonbook/models/__init__.py
from .base import Base
from .business import Business, BusinessHours, Employee
from .service import Service
from .schedule import BusinessBreak, BusinessHoliday, BlockedSlot
from .booking import Booking, BookingStatus, ACTIVE_STATUSES

__all__ = [
    "Base",
    "Business",
    "BusinessHours",
    "Employee",
    "Service",
    "BusinessBreak",
    "BusinessHoliday",
    "BlockedSlot",
    "Booking",
    "BookingStatus",
    "ACTIVE_STATUSES",
]
