"""Seed database with an admin account and sample data."""

import asyncio
import sys
from datetime import date

sys.path.append(".")

from sqlalchemy import select

from app.core.database import AsyncSessionLocal, init_db
from app.core.security import get_password_hash
from app.core.settings import settings
from app.models import (
    AcademicSession,
    DeliveryType,
    Group,
    Level,
    SessionState,
    User,
    UserRole,
)


async def seed_data():
    """Seed database with sample data."""
    await init_db()

    async with AsyncSessionLocal() as db:
        existing = await db.execute(
            select(User).where(User.username == settings.admin_username)
        )
        if existing.scalar_one_or_none() is None:
            db.add(
                User(
                    display_name="Administrator",
                    username=settings.admin_username,
                    email=settings.admin_email,
                    password_hash=get_password_hash(settings.admin_password),
                    role=UserRole.ADMIN,
                )
            )
            print(f"Created admin account '{settings.admin_username}'")

        session = AcademicSession(
            name="Session 2025",
            start_date=date(2025, 9, 1),
            end_date=date(2026, 6, 30),
            state=SessionState.ONGOING,
        )
        levels = [
            Level(name="Beginner", session=session),
            Level(name="Intermediate", session=session),
        ]
        groups = [
            Group(name="Group A", capacity=20, delivery_type=DeliveryType.ON_SITE, level=levels[0]),
            Group(name="Group B", capacity=15, delivery_type=DeliveryType.ONLINE, level=levels[0]),
            Group(name="Group C", capacity=20, delivery_type=DeliveryType.HYBRID, level=levels[1]),
        ]

        db.add(session)
        db.add_all(levels + groups)
        await db.commit()

        print(f"Seeded session '{session.name}' with {len(levels)} levels and {len(groups)} groups")


if __name__ == "__main__":
    asyncio.run(seed_data())
