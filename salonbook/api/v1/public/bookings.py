# ============================================================================
# salonbook/api/v1/public/bookings.py
# Customer booking submission and cancellation - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Path, Query, status
from typing import Optional
from uuid import UUID

from salonbook.api.dependencies import get_booking_service
from salonbook.schemas.booking import BookingCancel, BookingCreate, BookingResponse, UserBookingListResponse
from salonbook.services.booking.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["Public"])


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
        payload: BookingCreate,
        service: BookingService = Depends(get_booking_service)
):
    """
    Book a slot. The booking starts as pending.
    409 SLOT_TAKEN means the slot went away; fetch availability again.
    """
    booking = await service.submit_booking(
        user_id=payload.user_id,
        business_id=payload.business_id,
        day=payload.date,
        time=payload.time,
        employee_id=payload.employee_id,
        service_id=payload.service_id,
        notes=payload.notes,
        customer_name=payload.customer_name,
        customer_email=payload.customer_email,
        customer_phone=payload.customer_phone,
    )
    return booking.to_dict()


@router.get("", response_model=UserBookingListResponse)
async def list_my_bookings(
        user_id: str = Query(..., min_length=1, max_length=64, description="The customer's account ID"),
        status: Optional[str] = Query(None, description="pending, confirmed, completed or cancelled"),
        service: BookingService = Depends(get_booking_service)
):
    """
    A customer's bookings, newest slot first.
    Use the returned IDs with PATCH /bookings/{booking_id}/cancel.
    """
    bookings = await service.list_user_bookings(user_id, status)
    return {"total": len(bookings), "bookings": bookings}


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
        booking_id: UUID = Path(..., description="The booking ID"),
        service: BookingService = Depends(get_booking_service)
):
    booking = await service.get_booking(booking_id)
    return booking.to_dict()


@router.patch("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
        payload: BookingCancel,
        booking_id: UUID = Path(..., description="The booking ID"),
        service: BookingService = Depends(get_booking_service)
):
    booking = await service.cancel_booking(booking_id, payload.user_id)
    return booking.to_dict()
