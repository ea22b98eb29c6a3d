# salonbook/services/schedule/schedule_store.py
"""Schedule configuration store: weekly hours, recurring breaks and holidays"""
from datetime import date
from typing import Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from salonbook.core.exceptions import NotFoundError, ValidationError
from salonbook.models.business import Business, BusinessHours, Employee
from salonbook.models.schedule import BusinessBreak, BusinessHoliday
from salonbook.models.service import Service
from salonbook.services.storage import storage_errors

logger = logging.getLogger(__name__)


class ScheduleStore:
    """
    Reads and admin-side writes of a business's schedule configuration.

    The availability engine only calls the read accessors; the write methods
    back the owner dashboard.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_business(self, business_id: UUID) -> Optional[Business]:
        async with storage_errors(self.db, "load business"):
            return await self.db.get(Business, business_id)

    async def require_business(self, business_id: UUID) -> Business:
        business = await self.get_business(business_id)
        if not business:
            raise NotFoundError("Business not found", field="business_id")
        return business

    async def get_employee(self, employee_id: UUID) -> Optional[Employee]:
        async with storage_errors(self.db, "load employee"):
            return await self.db.get(Employee, employee_id)

    async def get_service(self, service_id: UUID) -> Optional[Service]:
        async with storage_errors(self.db, "load service"):
            return await self.db.get(Service, service_id)

    async def get_weekly_hours(self, business_id: UUID) -> Dict[int, BusinessHours]:
        """Configured hours keyed by day of week; missing days are absent"""
        async with storage_errors(self.db, "load business hours"):
            result = await self.db.execute(
                select(BusinessHours)
                .where(BusinessHours.business_id == business_id)
                .order_by(BusinessHours.day_of_week)
            )
        return {row.day_of_week: row for row in result.scalars().all()}

    async def get_breaks(self, business_id: UUID, day_of_week: Optional[int] = None) -> List[BusinessBreak]:
        query = select(BusinessBreak).where(BusinessBreak.business_id == business_id)
        if day_of_week is not None:
            query = query.where(BusinessBreak.day_of_week == day_of_week)

        async with storage_errors(self.db, "load breaks"):
            result = await self.db.execute(
                query.order_by(BusinessBreak.day_of_week, BusinessBreak.start_time)
            )
        return list(result.scalars().all())

    async def get_holidays(
            self,
            business_id: UUID,
            start_date: Optional[date] = None,
            end_date: Optional[date] = None
    ) -> List[BusinessHoliday]:
        """Holidays of a business, optionally limited to an inclusive date range"""
        query = select(BusinessHoliday).where(BusinessHoliday.business_id == business_id)
        if start_date:
            query = query.where(BusinessHoliday.date >= start_date)
        if end_date:
            query = query.where(BusinessHoliday.date <= end_date)

        async with storage_errors(self.db, "load holidays"):
            result = await self.db.execute(query.order_by(BusinessHoliday.date))
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Owner dashboard writes
    # ------------------------------------------------------------------

    async def set_business_hours(self, business_id: UUID, hours: List[dict]) -> List[BusinessHours]:
        """Replace every weekly-hours row of the business in one transaction"""
        async with storage_errors(self.db, "save business hours"):
            await self.db.execute(delete(BusinessHours).where(BusinessHours.business_id == business_id))
            rows = [
                BusinessHours(
                    business_id=business_id,
                    day_of_week=h["day_of_week"],
                    open_time=h["open_time"],
                    close_time=h["close_time"],
                    is_closed=h.get("is_closed", False),
                )
                for h in hours
            ]
            self.db.add_all(rows)
            await self.db.commit()

        logger.info(f"Replaced business hours for {business_id} ({len(rows)} days)")
        return sorted(rows, key=lambda r: r.day_of_week)

    async def add_break(
            self,
            business_id: UUID,
            day_of_week: int,
            start_time: str,
            end_time: str,
            label: Optional[str] = None
    ) -> BusinessBreak:
        pause = BusinessBreak(
            business_id=business_id,
            day_of_week=day_of_week,
            start_time=start_time,
            end_time=end_time,
            label=label,
        )
        async with storage_errors(self.db, "add break"):
            self.db.add(pause)
            await self.db.commit()
            await self.db.refresh(pause)

        logger.info(f"Added break {start_time}-{end_time} on day {day_of_week} for {business_id}")
        return pause

    async def remove_break(self, business_id: UUID, break_id: UUID) -> None:
        async with storage_errors(self.db, "remove break"):
            result = await self.db.execute(
                delete(BusinessBreak).where(
                    BusinessBreak.id == break_id,
                    BusinessBreak.business_id == business_id,
                )
            )
            await self.db.commit()

        if result.rowcount == 0:
            raise NotFoundError("Break not found", field="break_id")

    async def add_holiday(self, business_id: UUID, day: date, label: Optional[str] = None) -> BusinessHoliday:
        holiday = BusinessHoliday(business_id=business_id, date=day, label=label)
        try:
            async with storage_errors(self.db, "add holiday"):
                self.db.add(holiday)
                await self.db.commit()
                await self.db.refresh(holiday)
        except IntegrityError as exc:
            await self.db.rollback()
            raise ValidationError(f"A holiday already exists on {day.isoformat()}", field="date") from exc

        logger.info(f"Added holiday {day.isoformat()} for {business_id}")
        return holiday

    async def remove_holiday(self, business_id: UUID, holiday_id: UUID) -> None:
        async with storage_errors(self.db, "remove holiday"):
            result = await self.db.execute(
                delete(BusinessHoliday).where(
                    BusinessHoliday.id == holiday_id,
                    BusinessHoliday.business_id == business_id,
                )
            )
            await self.db.commit()

        if result.rowcount == 0:
            raise NotFoundError("Holiday not found", field="holiday_id")
