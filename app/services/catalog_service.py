"""Services for the session → level → group hierarchy."""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.errors import NotFoundError
from app.models import AcademicSession, Group, Level, SessionState
from app.schemas.group import GroupCreate, GroupUpdate
from app.schemas.level import LevelCreate, LevelUpdate
from app.schemas.session import SessionCreate, SessionUpdate

logger = logging.getLogger(__name__)


class SessionService:
    """CRUD for academic sessions."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, state: Optional[SessionState] = None) -> List[AcademicSession]:
        query = select(AcademicSession).order_by(AcademicSession.id.desc())
        if state is not None:
            query = query.where(AcademicSession.state == state)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get(self, session_id: int) -> AcademicSession:
        result = await self.db.execute(
            select(AcademicSession)
            .where(AcademicSession.id == session_id)
            .execution_options(populate_existing=True)
        )
        session = result.scalar_one_or_none()
        if not session:
            raise NotFoundError("Session not found")
        return session

    async def create(self, data: SessionCreate) -> AcademicSession:
        session = AcademicSession(**data.model_dump())
        self.db.add(session)
        await self.db.commit()
        logger.info(f"Created session '{session.name}' (id={session.id})")
        return await self.get(session.id)

    async def update(self, session_id: int, data: SessionUpdate) -> AcademicSession:
        session = await self.get(session_id)
        for field, value in data.model_dump().items():
            setattr(session, field, value)
        await self.db.commit()
        return await self.get(session_id)

    async def delete(self, session_id: int) -> None:
        """Delete a session together with its levels, groups and enrollments."""
        session = await self.get(session_id)
        await self.db.delete(session)
        await self.db.commit()
        logger.info(f"Deleted session {session_id}")


class LevelService:
    """CRUD for levels."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _query(self):
        return select(Level).options(selectinload(Level.session))

    async def list(self, session_id: Optional[int] = None) -> List[Level]:
        query = self._query().order_by(Level.id.desc())
        if session_id is not None:
            query = query.where(Level.session_id == session_id)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get(self, level_id: int) -> Level:
        result = await self.db.execute(
            self._query()
            .where(Level.id == level_id)
            .execution_options(populate_existing=True)
        )
        level = result.scalar_one_or_none()
        if not level:
            raise NotFoundError("Level not found")
        return level

    async def _ensure_session(self, session_id: int) -> None:
        if await self.db.get(AcademicSession, session_id) is None:
            raise NotFoundError("Session not found")

    async def create(self, data: LevelCreate) -> Level:
        await self._ensure_session(data.session_id)
        level = Level(**data.model_dump())
        self.db.add(level)
        await self.db.commit()
        logger.info(f"Created level '{level.name}' in session {level.session_id}")
        return await self.get(level.id)

    async def update(self, level_id: int, data: LevelUpdate) -> Level:
        level = await self.get(level_id)
        await self._ensure_session(data.session_id)
        level.name = data.name
        level.session_id = data.session_id
        await self.db.commit()
        return await self.get(level_id)

    async def delete(self, level_id: int) -> None:
        level = await self.get(level_id)
        await self.db.delete(level)
        await self.db.commit()
        logger.info(f"Deleted level {level_id}")


class GroupService:
    """CRUD for groups."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _query(self):
        return select(Group).options(
            selectinload(Group.level).selectinload(Level.session)
        )

    async def list(self, level_id: Optional[int] = None) -> List[Group]:
        query = self._query().order_by(Group.id.desc())
        if level_id is not None:
            query = query.where(Group.level_id == level_id)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get(self, group_id: int) -> Group:
        """Get a group with its level and session loaded."""
        result = await self.db.execute(
            self._query()
            .where(Group.id == group_id)
            .execution_options(populate_existing=True)
        )
        group = result.scalar_one_or_none()
        if not group:
            raise NotFoundError("Group not found")
        return group

    async def _ensure_level(self, level_id: int) -> None:
        if await self.db.get(Level, level_id) is None:
            raise NotFoundError("Level not found")

    async def create(self, data: GroupCreate) -> Group:
        await self._ensure_level(data.level_id)
        group = Group(**data.model_dump())
        self.db.add(group)
        await self.db.commit()
        logger.info(f"Created group '{group.name}' in level {group.level_id}")
        return await self.get(group.id)

    async def update(self, group_id: int, data: GroupUpdate) -> Group:
        group = await self.get(group_id)
        await self._ensure_level(data.level_id)
        for field, value in data.model_dump().items():
            setattr(group, field, value)
        await self.db.commit()
        return await self.get(group_id)

    async def delete(self, group_id: int) -> None:
        group = await self.get(group_id)
        await self.db.delete(group)
        await self.db.commit()
        logger.info(f"Deleted group {group_id}")
