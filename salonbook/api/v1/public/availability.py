# ============================================================================
# salonbook/api/v1/public/availability.py
# Customer-facing availability and schedule reads - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Path, Query
from typing import List, Optional
from uuid import UUID

from salonbook.api.dependencies import get_availability_service, get_store
from salonbook.schemas.availability import AvailabilityResponse, BookedSlotsResponse
from salonbook.schemas.schedule import BreakResponse, BusinessHoursResponse, HolidayResponse
from salonbook.services.availability.availability_service import AvailabilityService
from salonbook.services.schedule.schedule_store import ScheduleStore

router = APIRouter(prefix="/businesses", tags=["Public"])


@router.get("/{business_id}/availability", response_model=AvailabilityResponse)
async def get_availability(
        business_id: UUID = Path(..., description="The business ID"),
        date: str = Query(..., description="Day to check, YYYY-MM-DD"),
        employee_id: Optional[UUID] = Query(None, description="Only this employee's calendar"),
        service: AvailabilityService = Depends(get_availability_service)
):
    """
    Free slot starts for one day.
    Closed days return an empty list with closed_reason set.
    """
    result = await service.resolve_available_slots(business_id, date, employee_id)
    return result.to_dict()


@router.get("/{business_id}/booked-slots/{date}", response_model=BookedSlotsResponse)
async def get_booked_slots(
        business_id: UUID = Path(..., description="The business ID"),
        date: str = Path(..., description="Day to check, YYYY-MM-DD"),
        employee_id: Optional[UUID] = Query(None),
        service: AvailabilityService = Depends(get_availability_service)
):
    slots = await service.booked_slots(business_id, date, employee_id)
    return {
        "business_id": str(business_id),
        "date": date,
        "employee_id": str(employee_id) if employee_id else None,
        "booked_slots": slots,
    }


@router.get("/{business_id}/hours", response_model=List[BusinessHoursResponse])
async def get_business_hours(
        business_id: UUID = Path(...),
        store: ScheduleStore = Depends(get_store)
):
    await store.require_business(business_id)
    weekly = await store.get_weekly_hours(business_id)
    return [weekly[day] for day in sorted(weekly)]


@router.get("/{business_id}/breaks", response_model=List[BreakResponse])
async def get_breaks(
        business_id: UUID = Path(...),
        store: ScheduleStore = Depends(get_store)
):
    await store.require_business(business_id)
    return await store.get_breaks(business_id)


@router.get("/{business_id}/holidays", response_model=List[HolidayResponse])
async def get_holidays(
        business_id: UUID = Path(...),
        store: ScheduleStore = Depends(get_store)
):
    await store.require_business(business_id)
    return await store.get_holidays(business_id)
