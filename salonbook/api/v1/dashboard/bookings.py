# ============================================================================
# salonbook/api/v1/dashboard/bookings.py
# Owner booking views and status changes - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Path, Query
from typing import Optional
from uuid import UUID

from salonbook.api.dependencies import get_booking_service
from salonbook.schemas.booking import BookingListResponse, BookingResponse, BookingStatusUpdate
from salonbook.services.booking.booking_service import BookingService

router = APIRouter(tags=["Dashboard"])


@router.get("/businesses/{business_id}/bookings", response_model=BookingListResponse)
async def list_bookings(
        business_id: UUID = Path(..., description="The business ID"),
        date: Optional[str] = Query(None, description="Only this day, YYYY-MM-DD"),
        status: Optional[str] = Query(None, description="pending, confirmed, completed or cancelled"),
        service: BookingService = Depends(get_booking_service)
):
    bookings = await service.list_bookings(business_id, date, status)
    return {"total": len(bookings), "bookings": [b.to_dict() for b in bookings]}


@router.patch("/bookings/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
        payload: BookingStatusUpdate,
        booking_id: UUID = Path(..., description="The booking ID"),
        service: BookingService = Depends(get_booking_service)
):
    """
    Move a booking along pending -> confirmed -> completed, or cancel it.
    Completed and cancelled bookings cannot change again.
    """
    booking = await service.update_status(booking_id, payload.status)
    return booking.to_dict()
