"""
Pydantic schemas for booking requests and responses
"""
from pydantic import BaseModel, Field
from typing import List, Optional


# ============================================================================
# Request Schemas
# ============================================================================

class BookingCreate(BaseModel):
    """
    Booking submission.
    Date and time stay strings here; the booking service validates them so
    every input error is reported the same way.
    """
    user_id: str = Field(..., min_length=1, max_length=64)
    business_id: str
    date: str = Field(..., description="YYYY-MM-DD")
    time: str = Field(..., description="HH:MM slot start")
    employee_id: Optional[str] = None
    service_id: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=1000)
    customer_name: Optional[str] = Field(None, max_length=200)
    customer_email: Optional[str] = Field(None, max_length=255)
    customer_phone: Optional[str] = Field(None, max_length=32)


class BookingCancel(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=64)


class BookingStatusUpdate(BaseModel):
    status: str = Field(..., description="confirmed, completed or cancelled")


# ============================================================================
# Response Schemas
# ============================================================================

class BookingResponse(BaseModel):
    id: str
    user_id: str
    business_id: str
    employee_id: Optional[str] = None
    service_id: Optional[str] = None
    date: str
    time: str
    end_time: Optional[str] = None
    status: str
    notes: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    cancelled_at: Optional[str] = None


class BookingListResponse(BaseModel):
    total: int
    bookings: List[BookingResponse]


class BusinessSummary(BaseModel):
    id: str
    owner_id: Optional[str] = None
    name: str
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    slot_duration: Optional[int] = None
    timezone: Optional[str] = None
    is_active: bool


class UserBookingResponse(BookingResponse):
    business: BusinessSummary


class UserBookingListResponse(BaseModel):
    total: int
    bookings: List[UserBookingResponse]
