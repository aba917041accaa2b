"""Sessions API endpoints."""

from typing import List, Optional

from fastapi import APIRouter, status

from app.api.dependencies import CurrentUser, DbSession
from app.models import AcademicSession, Level, SessionState
from app.schemas.level import LevelCreate, LevelResponse, SessionLevelCreate
from app.schemas.session import SessionCreate, SessionResponse, SessionUpdate
from app.services.catalog_service import LevelService, SessionService

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("", response_model=List[SessionResponse])
async def get_sessions(
    db: DbSession,
    auth: CurrentUser,
    state: Optional[SessionState] = None,
) -> List[AcademicSession]:
    """Get all sessions, newest first, optionally filtered by state."""
    return await SessionService(db).list(state=state)


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    session_data: SessionCreate,
    db: DbSession,
    auth: CurrentUser,
) -> AcademicSession:
    return await SessionService(db).create(session_data)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: int, db: DbSession, auth: CurrentUser) -> AcademicSession:
    return await SessionService(db).get(session_id)


@router.put("/{session_id}", response_model=SessionResponse)
async def update_session(
    session_id: int,
    session_data: SessionUpdate,
    db: DbSession,
    auth: CurrentUser,
) -> AcademicSession:
    return await SessionService(db).update(session_id, session_data)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: int, db: DbSession, auth: CurrentUser) -> None:
    """Delete session with its levels, groups and enrollments."""
    await SessionService(db).delete(session_id)


@router.get("/{session_id}/niveaux", response_model=List[LevelResponse])
async def get_session_levels(
    session_id: int, db: DbSession, auth: CurrentUser
) -> List[Level]:
    """Levels belonging to one session."""
    await SessionService(db).get(session_id)
    return await LevelService(db).list(session_id=session_id)


@router.post(
    "/{session_id}/niveaux",
    response_model=LevelResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_session_level(
    session_id: int,
    level_data: SessionLevelCreate,
    db: DbSession,
    auth: CurrentUser,
) -> Level:
    return await LevelService(db).create(
        LevelCreate(name=level_data.name, session_id=session_id)
    )
