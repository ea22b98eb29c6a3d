# salonbook/core/exceptions.py
"""Typed errors raised by the booking engine and rendered by the API layer"""
from typing import Any, Dict, Optional


class BookingEngineError(Exception):
    """Base error carrying a machine-readable code and the offending field"""

    code = "ENGINE_ERROR"
    status_code = 500

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "detail": self.message, "field": self.field}


class ValidationError(BookingEngineError):
    """Malformed or missing input; raised before any storage access"""

    code = "INVALID_INPUT"
    status_code = 422


class NotFoundError(BookingEngineError):
    code = "NOT_FOUND"
    status_code = 404


class ForbiddenError(BookingEngineError):
    code = "FORBIDDEN"
    status_code = 403


class BusinessClosedError(BookingEngineError):
    """The requested date is a holiday or a closed weekday"""

    code = "BUSINESS_CLOSED"
    status_code = 409

    def __init__(self, message: str, reason: Optional[str] = None, field: Optional[str] = "date"):
        super().__init__(message, field=field)
        self.reason = reason


class SlotUnavailableError(BookingEngineError):
    """The exact slot is occupied or not offered; re-query availability and retry"""

    code = "SLOT_TAKEN"
    status_code = 409

    def __init__(self, message: str = "This time slot is already booked", field: Optional[str] = "time"):
        super().__init__(message, field=field)


class InvalidStatusTransitionError(BookingEngineError):
    code = "INVALID_TRANSITION"
    status_code = 409

    def __init__(self, current: str, requested: str):
        super().__init__(
            f"Cannot change booking status from {current} to {requested}",
            field="status",
        )
        self.current = current
        self.requested = requested


class StorageError(BookingEngineError):
    """Persistence failure; propagated to the caller without retry"""

    code = "STORAGE_ERROR"
    status_code = 503
