#!/usr/bin/env python3
"""
Seed database with development data for the scheduler.
"""

import asyncio
import os
from datetime import datetime, time, timedelta
from uuid import uuid4
from zoneinfo import ZoneInfo

from sqlalchemy import func, select

from subscheduler.config.database import get_async_session_factory
from subscheduler.config.logging import configure_logging, get_logger
from subscheduler.config.settings import settings
from subscheduler.domain.value_objects.org_calendar import org_today
from subscheduler.infrastructure.database.models import (
    JobModel,
    JobPhaseModel,
    JobTypeModel,
    NotificationRecipientModel,
    ProfileModel,
    PropertyModel,
    UnitSizeModel,
)

configure_logging()
logger = get_logger(__name__)

PHASES = [
    ("Job Request", "#3B82F6", "#2563EB"),
    ("Work Order", "#F59E0B", "#D97706"),
    ("Pending Work Order", "#8B5CF6", "#7C3AED"),
    ("Completed", "#10B981", "#059669"),
    ("Cancelled", "#EF4444", "#DC2626"),
    ("Invoicing", "#EC4899", "#DB2777"),
]

SUBCONTRACTORS = [
    ("Alice Brush", "alice@example.com", ["monday", "tuesday", "wednesday", "thursday", "friday"]),
    ("Bob Roller", "bob@example.com", ["saturday", "sunday"]),
    ("Carmen Trim", "carmen@example.com", ["monday", "wednesday", "friday"]),
]


def get_seed_database_url() -> str:
    """Get database URL for seeding."""
    return os.getenv("MIGRATION_DATABASE_URL") or str(settings.DATABASE_URL)


def _working_days(day_names):
    days = ["sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]
    return {day: day in day_names for day in days}


async def seed_database() -> None:
    """Seed database with development data."""
    session_factory = get_async_session_factory(get_seed_database_url())

    async with session_factory() as session:
        existing = await session.execute(select(func.count()).select_from(JobPhaseModel))
        if existing.scalar_one() > 0:
            logger.info("Database already has data, skipping seed")
            return

        phases = {}
        for order, (label, dark, light) in enumerate(PHASES):
            phase = JobPhaseModel(
                id=uuid4(),
                job_phase_label=label,
                color_dark_mode=dark,
                color_light_mode=light,
                sort_order=order,
            )
            session.add(phase)
            phases[label] = phase

        admin = ProfileModel(
            id=uuid4(), full_name="Office Admin", email="admin@example.com", role="admin"
        )
        session.add(admin)
        session.add(NotificationRecipientModel(id=uuid4(), user_id=admin.id))

        for full_name, email, day_names in SUBCONTRACTORS:
            session.add(
                ProfileModel(
                    id=uuid4(),
                    full_name=full_name,
                    email=email,
                    role="subcontractor",
                    working_days=_working_days(day_names),
                )
            )

        prop = PropertyModel(
            id=uuid4(),
            property_name="Maple Court Apartments",
            address="100 Maple Ct",
            city="Newark",
            state="NJ",
        )
        unit_size = UnitSizeModel(id=uuid4(), unit_size_label="2 Bedroom")
        job_type = JobTypeModel(id=uuid4(), job_type_label="Full Paint")
        session.add_all([prop, unit_size, job_type])

        tz = ZoneInfo(settings.ORG_TIMEZONE)
        today = org_today(settings.ORG_TIMEZONE)
        for num in range(1, 13):
            day = today + timedelta(days=num % 4)
            session.add(
                JobModel(
                    id=uuid4(),
                    work_order_num=num,
                    property_id=prop.id,
                    unit_number=f"{100 + num}",
                    unit_size_id=unit_size.id,
                    job_type_id=job_type.id,
                    current_phase_id=phases["Job Request"].id,
                    scheduled_date=datetime.combine(day, time(9, 0), tzinfo=tz),
                    created_by=admin.id,
                )
            )

        await session.commit()
        logger.info("Seed data created", phases=len(PHASES), jobs=12)


if __name__ == "__main__":
    asyncio.run(seed_database())
