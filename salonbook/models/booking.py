# salonbook/models/booking.py
from enum import Enum

from sqlalchemy import Column, String, Text, Date, DateTime, ForeignKey, Uuid, Index, text
from sqlalchemy.sql import func
import uuid

from salonbook.models.base import Base


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Statuses that keep a slot occupied
ACTIVE_STATUSES = (BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value)

# Unassigned bookings store "" so the unique index sees them as one employee
UNASSIGNED_EMPLOYEE_KEY = ""

_ACTIVE_PREDICATE = text("status IN ('pending', 'confirmed')")


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index(
            "uq_bookings_active_slot",
            "business_id",
            "booking_date",
            "booking_time",
            "employee_key",
            unique=True,
            postgresql_where=_ACTIVE_PREDICATE,
            sqlite_where=_ACTIVE_PREDICATE,
        ),
        Index("ix_bookings_business_date", "business_id", "booking_date"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # References
    user_id = Column(String(64), nullable=False, index=True)  # external account id
    business_id = Column(Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    employee_id = Column(Uuid, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True)
    employee_key = Column(String(36), nullable=False, default=UNASSIGNED_EMPLOYEE_KEY)
    service_id = Column(Uuid, ForeignKey("services.id", ondelete="SET NULL"), nullable=True)

    # Slot
    booking_date = Column(Date, nullable=False)
    booking_time = Column(String(5), nullable=False)  # HH:MM slot start
    end_time = Column(String(5), nullable=True)  # start + service duration

    # Customer info (passed on to notification collaborators)
    customer_name = Column(String(200), nullable=True)
    customer_email = Column(String(255), nullable=True)
    customer_phone = Column(String(32), nullable=True)
    notes = Column(Text, nullable=True)

    status = Column(String(16), nullable=False, default=BookingStatus.PENDING.value)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    @staticmethod
    def employee_key_for(employee_id) -> str:
        return str(employee_id) if employee_id else UNASSIGNED_EMPLOYEE_KEY

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    def __repr__(self):
        return f"<Booking(id={self.id}, {self.booking_date} {self.booking_time}, status={self.status})>"

    def to_dict(self):
        """Convert to dictionary for API responses and event payloads"""
        return {
            "id": str(self.id),
            "user_id": self.user_id,
            "business_id": str(self.business_id),
            "employee_id": str(self.employee_id) if self.employee_id else None,
            "service_id": str(self.service_id) if self.service_id else None,
            "date": self.booking_date.isoformat(),
            "time": self.booking_time,
            "end_time": self.end_time,
            "status": self.status,
            "notes": self.notes,
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "cancelled_at": self.cancelled_at.isoformat() if self.cancelled_at else None,
        }
