"""
Pydantic schemas for schedule configuration (hours, breaks, holidays, blocked slots)
"""
from datetime import date as date_type
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from uuid import UUID

from salonbook.core.exceptions import ValidationError
from salonbook.utils.time_utils import normalize_time, parse_time


def _hhmm(value: str) -> str:
    try:
        return normalize_time(value)
    except ValidationError as e:
        raise ValueError(e.message)


class _TimeRange(BaseModel):
    start_time: str
    end_time: str

    @field_validator('start_time', 'end_time')
    @classmethod
    def validate_time(cls, v):
        return _hhmm(v)

    @model_validator(mode='after')
    def check_order(self):
        if parse_time(self.start_time) >= parse_time(self.end_time):
            raise ValueError('start_time must be before end_time')
        return self


# ============================================================================
# Request Schemas
# ============================================================================

class BusinessHoursInput(BaseModel):
    """Hours for one weekday (0=Sunday ... 6=Saturday)"""
    day_of_week: int = Field(..., ge=0, le=6)
    open_time: str = Field(default="09:00")
    close_time: str = Field(default="18:00")
    is_closed: bool = False

    @field_validator('open_time', 'close_time')
    @classmethod
    def validate_time(cls, v):
        return _hhmm(v)

    @model_validator(mode='after')
    def check_order(self):
        if not self.is_closed and parse_time(self.open_time) >= parse_time(self.close_time):
            raise ValueError('open_time must be before close_time')
        return self


class BusinessHoursUpdate(BaseModel):
    """Full weekly schedule; replaces whatever is stored"""
    hours: List[BusinessHoursInput] = Field(..., max_length=7)

    @field_validator('hours')
    @classmethod
    def unique_days(cls, v):
        days = [h.day_of_week for h in v]
        if len(days) != len(set(days)):
            raise ValueError('Each day_of_week may appear only once')
        return v


class BreakCreate(_TimeRange):
    day_of_week: int = Field(..., ge=0, le=6)
    label: Optional[str] = Field(None, max_length=100)


class HolidayCreate(BaseModel):
    date: date_type
    label: Optional[str] = Field(None, max_length=100)


class BlockedSlotCreate(_TimeRange):
    date: date_type
    employee_id: Optional[UUID] = None
    reason: Optional[str] = Field(None, max_length=255)


# ============================================================================
# Response Schemas
# ============================================================================

class BusinessHoursResponse(BaseModel):
    day_of_week: int
    open_time: str
    close_time: str
    is_closed: bool

    class Config:
        from_attributes = True


class BreakResponse(BaseModel):
    id: UUID
    day_of_week: int
    start_time: str
    end_time: str
    label: Optional[str] = None

    class Config:
        from_attributes = True


class HolidayResponse(BaseModel):
    id: UUID
    date: date_type
    label: Optional[str] = None

    class Config:
        from_attributes = True


class BlockedSlotResponse(BaseModel):
    id: UUID
    employee_id: Optional[UUID] = None
    date: date_type
    start_time: str
    end_time: str
    reason: Optional[str] = None

    class Config:
        from_attributes = True
