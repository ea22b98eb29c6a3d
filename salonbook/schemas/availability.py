"""
Pydantic schemas for availability queries
"""
from pydantic import BaseModel, Field
from typing import List, Optional


class AvailabilityResponse(BaseModel):
    """Free slot starts for one business day"""
    business_id: str
    date: str
    employee_id: Optional[str] = None
    slot_duration: int
    slots: List[str] = Field(default_factory=list, description="Slot starts as HH:MM, ascending")
    closed_reason: Optional[str] = Field(None, description="'holiday' or 'weekly-closed' when closed")
    holiday_label: Optional[str] = None


class BookedSlotsResponse(BaseModel):
    business_id: str
    date: str
    employee_id: Optional[str] = None
    booked_slots: List[str]
