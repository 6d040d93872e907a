"""
Demo data seeder.

Populates the database with a demo user, eight sample applications and
default settings for local development.

Usage:
    python -m jobtracker.scripts.seed_demo_data seed
    python -m jobtracker.scripts.seed_demo_data clear

Dependencies: sqlalchemy, jobtracker.boundary.db
System role: Development data helper
"""

import argparse
import asyncio
import logging
import sys
from datetime import date, datetime, timezone
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from jobtracker.boundary.db.connection import get_async_engine, get_async_session_factory
from jobtracker.boundary.db.models import (
    ApplicationModel,
    ApplicationStatus,
    ExportFormat,
    UserModel,
    UserSettingsModel,
)
from jobtracker.configs import get_settings

logger = logging.getLogger(__name__)

DEMO_USER_ID = UUID("af1b62f5-c193-414d-b8de-d76419309ad3")
DEMO_USER_EMAIL = "demo@jobtracker.dev"


def _at(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


SEED_APPLICATIONS = [
    {
        "company": "TechCorp",
        "position": "Senior Frontend Developer",
        "status": ApplicationStatus.INTERVIEW,
        "applied_date": date(2024, 1, 15),
        "next_date": _at(2024, 1, 25),
        "next_event": "Technical Interview",
        "cv_version": "CV_v2.1_Frontend_Specialist",
        "notes": "Great company culture. Spoke with Sarah from HR. Technical interview will cover React, TypeScript, and system design.",
        "job_url": "https://techcorp.com/careers/senior-frontend",
    },
    {
        "company": "StartupXYZ",
        "position": "Full Stack Engineer",
        "status": ApplicationStatus.REJECTED,
        "applied_date": date(2024, 1, 10),
        "cv_version": "CV_v2.0_Fullstack",
        "notes": "Automated rejection email received. They went with someone with more backend experience.",
    },
    {
        "company": "BigTech Inc",
        "position": "Software Engineer",
        "status": ApplicationStatus.ASSESSMENT,
        "applied_date": date(2024, 1, 20),
        "next_date": _at(2024, 1, 28),
        "next_event": "Coding Assessment",
        "cv_version": "CV_v2.1_BigTech_Optimized",
        "notes": "HackerRank assessment. Focus on algorithms and data structures. 90 minutes, 3 problems.",
        "job_url": "https://bigtech.com/jobs/swe-l4",
    },
    {
        "company": "InnovateLabs",
        "position": "React Developer",
        "status": ApplicationStatus.APPLIED,
        "applied_date": date(2024, 1, 22),
        "cv_version": "CV_v2.1_React_Focused",
        "notes": "Applied through their website. Emphasize React Native experience.",
        "job_url": "https://innovatelabs.io/careers/react-dev",
    },
    {
        "company": "DataDriven Co",
        "position": "Frontend Architect",
        "status": ApplicationStatus.OFFER,
        "applied_date": date(2024, 1, 5),
        "next_date": _at(2024, 1, 30),
        "next_event": "Offer Response Deadline",
        "cv_version": "CV_v2.2_Senior_Architect",
        "notes": "Offer: $140k + equity. Need to respond by Jan 30. Great team, interesting tech stack (React, GraphQL, Micro-frontends).",
    },
    {
        "company": "CloudFirst",
        "position": "Senior Developer",
        "status": ApplicationStatus.INTERVIEW,
        "applied_date": date(2024, 1, 18),
        "next_date": _at(2024, 1, 26),
        "next_event": "Final Round Interview",
        "cv_version": "CV_v2.1_Cloud_Native",
        "notes": "Final round with CTO. Will discuss architecture decisions and leadership experience.",
        "job_url": "https://cloudfirst.dev/careers/senior-dev",
    },
    {
        "company": "FinTech Solutions",
        "position": "JavaScript Developer",
        "status": ApplicationStatus.WITHDRAWN,
        "applied_date": date(2024, 1, 12),
        "cv_version": "CV_v2.0_JavaScript",
        "notes": "Withdrew application after learning about their 60-hour work week policy.",
    },
    {
        "company": "GreenTech Innovations",
        "position": "Frontend Lead",
        "status": ApplicationStatus.APPLIED,
        "applied_date": date(2024, 1, 23),
        "cv_version": "CV_v2.2_Leadership",
        "notes": "Mission-driven company. Applied via LinkedIn. Recruiter mentioned they're looking for someone with team lead experience.",
        "job_url": "https://greentech.com/jobs/frontend-lead",
    },
]

SEED_USER_SETTINGS = {
    "notifications": True,
    "auto_sync": False,
    "dark_mode": True,
    "email_reminders": True,
    "export_format": ExportFormat.JSON,
    "data_retention": 365,
}


async def seed_demo_data(session: AsyncSession) -> bool:
    """
    Insert the demo user, applications and settings.

    Skips everything if the demo user already has data.

    Args:
        session: Async database session

    Returns:
        bool: True if data was inserted, False if it already existed
    """
    existing = await session.execute(
        select(ApplicationModel.id).where(ApplicationModel.user_id == DEMO_USER_ID).limit(1)
    )
    if existing.first() is not None:
        logger.info("Demo data already exists, skipping seed")
        return False

    try:
        if await session.get(UserModel, DEMO_USER_ID) is None:
            session.add(UserModel(id=DEMO_USER_ID, email=DEMO_USER_EMAIL, name="Demo User"))
            await session.flush()

        session.add_all(
            ApplicationModel(user_id=DEMO_USER_ID, **fields) for fields in SEED_APPLICATIONS
        )
        settings_row = await session.execute(
            select(UserSettingsModel.id).where(UserSettingsModel.user_id == DEMO_USER_ID)
        )
        if settings_row.first() is None:
            session.add(UserSettingsModel(user_id=DEMO_USER_ID, **SEED_USER_SETTINGS))
        await session.commit()
    except Exception as e:
        await session.rollback()
        logger.error("Failed to seed demo data", extra={"error": str(e)})
        raise

    logger.info("Demo data seeded", extra={"applications": len(SEED_APPLICATIONS)})
    return True


async def clear_demo_data(session: AsyncSession) -> None:
    """Delete the demo user's applications and settings."""
    try:
        await session.execute(delete(ApplicationModel).where(ApplicationModel.user_id == DEMO_USER_ID))
        await session.execute(delete(UserSettingsModel).where(UserSettingsModel.user_id == DEMO_USER_ID))
        await session.commit()
    except Exception as e:
        await session.rollback()
        logger.error("Failed to clear demo data", extra={"error": str(e)})
        raise
    logger.info("Demo data cleared")


async def _main(command: str) -> None:
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        if command == "clear":
            await clear_demo_data(session)
        else:
            await seed_demo_data(session)
    await get_async_engine().dispose()


def main():
    from jobtracker.observability import configure_logging

    parser = argparse.ArgumentParser(description="Seed or clear JobTracker demo data")
    parser.add_argument("command", nargs="?", choices=["seed", "clear"], default="seed")
    args = parser.parse_args()

    configure_logging()
    if get_settings().environment == "production":
        logger.error("Refusing to run seed script in production")
        sys.exit(1)

    asyncio.run(_main(args.command))


if __name__ == "__main__":
    main()
