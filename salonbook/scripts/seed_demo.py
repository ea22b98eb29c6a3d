#!/usr/bin/env python3
"""
Seed a demo salon with weekly hours, a lunch break, a holiday, one stylist and one service
Usage: python -m salonbook.scripts.seed_demo
"""
import asyncio
import logging
import sys
from datetime import date, timedelta

from salonbook.config.database import SessionLocal, create_tables
from salonbook.models import Business, BusinessBreak, BusinessHoliday, BusinessHours, Employee, Service
from salonbook.utils.my_logging import setup_logging

logger = logging.getLogger(__name__)

# Monday to Saturday open, Sunday closed (0=Sunday)
WEEKLY_HOURS = {
    0: None,
    1: ("09:00", "18:00"),
    2: ("09:00", "18:00"),
    3: ("09:00", "18:00"),
    4: ("09:00", "20:00"),
    5: ("09:00", "20:00"),
    6: ("10:00", "16:00"),
}


async def seed_demo() -> Business:
    await create_tables()

    async with SessionLocal() as db:
        try:
            business = Business(
                name="Studio Lumen Hair & Beauty",
                owner_id="demo-owner",
                slot_duration=30,
                timezone="Europe/Berlin",
            )
            db.add(business)
            await db.flush()

            for day, window in WEEKLY_HOURS.items():
                db.add(BusinessHours(
                    business_id=business.id,
                    day_of_week=day,
                    open_time=window[0] if window else "00:00",
                    close_time=window[1] if window else "00:00",
                    is_closed=window is None,
                ))

            # Lunch on weekdays
            for day in range(1, 6):
                db.add(BusinessBreak(
                    business_id=business.id,
                    day_of_week=day,
                    start_time="13:00",
                    end_time="14:00",
                    label="Lunch",
                ))

            db.add(BusinessHoliday(
                business_id=business.id,
                date=date.today() + timedelta(days=14),
                label="Team training day",
            ))
            db.add(Employee(business_id=business.id, name="Mara Lindqvist", title="Senior Stylist"))
            db.add(Service(
                business_id=business.id,
                name="Cut & Blow-dry",
                description="Wash, cut and styling",
                price=45,
                duration=60,
            ))

            await db.commit()
            logger.info(f"Seeded demo business {business.id} ({business.name})")
            return business

        except Exception as e:
            await db.rollback()
            logger.error(f"Error seeding demo business: {e}")
            raise


if __name__ == "__main__":
    setup_logging()
    try:
        asyncio.run(seed_demo())
    except Exception:
        sys.exit(1)
