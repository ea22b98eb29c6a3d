# ============================================================================
# salonbook/api/v1/dashboard/schedule.py
# Owner schedule configuration: hours, breaks, holidays, blocked slots
# ============================================================================
from datetime import date
from fastapi import APIRouter, Depends, Path, Query, status
from typing import List, Optional
from uuid import UUID
import logging

from salonbook.api.dependencies import get_ledger, get_store
from salonbook.core.exceptions import ValidationError
from salonbook.schemas.schedule import (
    BlockedSlotCreate,
    BlockedSlotResponse,
    BreakCreate,
    BreakResponse,
    BusinessHoursResponse,
    BusinessHoursUpdate,
    HolidayCreate,
    HolidayResponse,
)
from salonbook.services.booking.commitment_ledger import CommitmentLedger
from salonbook.services.schedule.schedule_store import ScheduleStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/businesses", tags=["Dashboard"])


# ============================================================================
# Weekly hours
# ============================================================================

@router.put("/{business_id}/hours", response_model=List[BusinessHoursResponse])
async def replace_business_hours(
        payload: BusinessHoursUpdate,
        business_id: UUID = Path(...),
        store: ScheduleStore = Depends(get_store)
):
    """Replace the whole weekly schedule. Days left out fall back to defaults."""
    await store.require_business(business_id)
    return await store.set_business_hours(business_id, [h.model_dump() for h in payload.hours])


# ============================================================================
# Breaks
# ============================================================================

@router.post("/{business_id}/breaks", response_model=BreakResponse, status_code=status.HTTP_201_CREATED)
async def create_break(
        payload: BreakCreate,
        business_id: UUID = Path(...),
        store: ScheduleStore = Depends(get_store)
):
    await store.require_business(business_id)
    return await store.add_break(
        business_id,
        day_of_week=payload.day_of_week,
        start_time=payload.start_time,
        end_time=payload.end_time,
        label=payload.label,
    )


@router.delete("/{business_id}/breaks/{break_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_break(
        business_id: UUID = Path(...),
        break_id: UUID = Path(...),
        store: ScheduleStore = Depends(get_store)
):
    await store.remove_break(business_id, break_id)


# ============================================================================
# Holidays
# ============================================================================

@router.post("/{business_id}/holidays", response_model=HolidayResponse, status_code=status.HTTP_201_CREATED)
async def create_holiday(
        payload: HolidayCreate,
        business_id: UUID = Path(...),
        store: ScheduleStore = Depends(get_store)
):
    await store.require_business(business_id)
    return await store.add_holiday(business_id, payload.date, payload.label)


@router.delete("/{business_id}/holidays/{holiday_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_holiday(
        business_id: UUID = Path(...),
        holiday_id: UUID = Path(...),
        store: ScheduleStore = Depends(get_store)
):
    await store.remove_holiday(business_id, holiday_id)


# ============================================================================
# Blocked slots
# ============================================================================

@router.get("/{business_id}/blocked-slots", response_model=List[BlockedSlotResponse])
async def list_blocked_slots(
        business_id: UUID = Path(...),
        start_date: Optional[date] = Query(None, description="On or after this date"),
        end_date: Optional[date] = Query(None, description="On or before this date"),
        store: ScheduleStore = Depends(get_store),
        ledger: CommitmentLedger = Depends(get_ledger)
):
    await store.require_business(business_id)
    return await ledger.list_blocked_slots(business_id, start_date, end_date)


@router.post("/{business_id}/blocked-slots", response_model=BlockedSlotResponse, status_code=status.HTTP_201_CREATED)
async def create_blocked_slot(
        payload: BlockedSlotCreate,
        business_id: UUID = Path(...),
        store: ScheduleStore = Depends(get_store),
        ledger: CommitmentLedger = Depends(get_ledger)
):
    """Block a range for the whole business, or for one employee when employee_id is set"""
    await store.require_business(business_id)
    if payload.employee_id:
        employee = await store.get_employee(payload.employee_id)
        if not employee or employee.business_id != business_id:
            raise ValidationError("Employee does not belong to this business", field="employee_id")

    return await ledger.create_blocked_slot(
        business_id,
        day=payload.date,
        start_time=payload.start_time,
        end_time=payload.end_time,
        employee_id=payload.employee_id,
        reason=payload.reason,
    )


@router.delete("/{business_id}/blocked-slots/{slot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_blocked_slot(
        business_id: UUID = Path(...),
        slot_id: UUID = Path(...),
        ledger: CommitmentLedger = Depends(get_ledger)
):
    await ledger.delete_blocked_slot(business_id, slot_id)
