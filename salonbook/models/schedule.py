# salonbook/models/schedule.py
"""
Recurring breaks, holidays and ad-hoc blocked ranges
"""
from sqlalchemy import Column, String, Integer, Date, DateTime, ForeignKey, Uuid, UniqueConstraint, Index
from sqlalchemy.sql import func
import uuid

from salonbook.models.base import Base


class BusinessBreak(Base):
    """Weekly recurring pause (lunch etc.)"""
    __tablename__ = "business_breaks"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    business_id = Column(Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)

    day_of_week = Column(Integer, nullable=False)  # 0=Sunday, 6=Saturday
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    label = Column(String(100), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())


class BusinessHoliday(Base):
    """A date on which the whole business is closed"""
    __tablename__ = "business_holidays"
    __table_args__ = (
        UniqueConstraint("business_id", "date", name="uq_business_holidays_date"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    business_id = Column(Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)

    date = Column(Date, nullable=False)
    label = Column(String(100), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())


class BlockedSlot(Base):
    """One-off unavailable range; business-wide unless employee_id is set"""
    __tablename__ = "blocked_slots"
    __table_args__ = (
        Index("ix_blocked_slots_business_date", "business_id", "date"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    business_id = Column(Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    employee_id = Column(Uuid, ForeignKey("employees.id", ondelete="CASCADE"), nullable=True)

    date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    reason = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
