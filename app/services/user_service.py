"""User account service and dashboard aggregates."""

import logging
from datetime import datetime, timedelta, timezone
from typing import List

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError, ValidationError
from app.core.security import get_password_hash
from app.models import AcademicSession, Enrollment, SessionState, Student, User
from app.schemas.dashboard import StatItem
from app.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

RECENT_USERS_LIMIT = 5
NEW_USERS_WINDOW_DAYS = 7


class UserService:
    """CRUD for user accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self) -> List[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def get(self, user_id: int) -> User:
        result = await self.db.execute(
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("User not found")
        return user

    async def create(self, data: UserCreate) -> User:
        existing = await self.db.execute(
            select(User.id).where(
                or_(User.username == data.username, User.email == data.email)
            )
        )
        if existing.first() is not None:
            raise ValidationError("Username or email already in use")

        user = User(
            display_name=data.display_name,
            username=data.username,
            email=data.email,
            contact=data.contact,
            password_hash=get_password_hash(data.password),
            role=data.role,
        )
        self.db.add(user)
        await self.db.commit()
        logger.info(f"Created user '{user.username}' with role {user.role.value}")
        return await self.get(user.id)

    async def update(self, user_id: int, data: UserUpdate) -> User:
        user = await self.get(user_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        password = changes.pop("password", None)
        for field, value in changes.items():
            setattr(user, field, value)
        if password:
            user.password_hash = get_password_hash(password)
        await self.db.commit()
        return await self.get(user_id)

    async def delete(self, user_id: int) -> None:
        """Delete an account together with its student profile, if any."""
        user = await self.get(user_id)
        await self.db.delete(user)
        await self.db.commit()
        logger.info(f"Deleted user {user_id}")

    async def recent(self, limit: int = RECENT_USERS_LIMIT) -> List[User]:
        result = await self.db.execute(
            select(User).order_by(User.created_at.desc(), User.id.desc()).limit(limit)
        )
        return list(result.scalars().all())

    async def stats(self) -> List[StatItem]:
        """Dashboard counters."""
        since = datetime.now(timezone.utc) - timedelta(days=NEW_USERS_WINDOW_DAYS)

        user_count = await self.db.scalar(select(func.count(User.id)))
        new_user_count = await self.db.scalar(
            select(func.count(User.id)).where(User.created_at >= since)
        )
        student_count = await self.db.scalar(select(func.count(Student.id)))
        ongoing_sessions = await self.db.scalar(
            select(func.count(AcademicSession.id)).where(
                AcademicSession.state == SessionState.ONGOING
            )
        )
        enrollment_count = await self.db.scalar(select(func.count(Enrollment.id)))

        return [
            StatItem(title="Total users", value=user_count or 0,
                     description="All registered accounts", icon="👥"),
            StatItem(title="New this week", value=new_user_count or 0,
                     description=f"Accounts created in the last {NEW_USERS_WINDOW_DAYS} days",
                     icon="📈"),
            StatItem(title="Students", value=student_count or 0,
                     description="Student profiles", icon="🎓"),
            StatItem(title="Ongoing sessions", value=ongoing_sessions or 0,
                     description="Sessions currently running", icon="📅"),
            StatItem(title="Enrollments", value=enrollment_count or 0,
                     description="Students enrolled in groups", icon="📝"),
        ]
