"""Levels (niveaux) API endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from app.api.dependencies import CurrentUser, DbSession
from app.models import Level
from app.schemas.level import LevelCreate, LevelResponse, LevelUpdate
from app.services.catalog_service import LevelService

router = APIRouter(prefix="/niveaux", tags=["levels"])


@router.get("", response_model=List[LevelResponse])
async def get_levels(
    db: DbSession,
    auth: CurrentUser,
    session_id: Optional[int] = Query(default=None, alias="sessionId"),
) -> List[Level]:
    return await LevelService(db).list(session_id=session_id)


@router.post("", response_model=LevelResponse, status_code=status.HTTP_201_CREATED)
async def create_level(level_data: LevelCreate, db: DbSession, auth: CurrentUser) -> Level:
    return await LevelService(db).create(level_data)


@router.get("/{level_id}", response_model=LevelResponse)
async def get_level(level_id: int, db: DbSession, auth: CurrentUser) -> Level:
    return await LevelService(db).get(level_id)


@router.put("/{level_id}", response_model=LevelResponse)
async def update_level(
    level_id: int, level_data: LevelUpdate, db: DbSession, auth: CurrentUser
) -> Level:
    return await LevelService(db).update(level_id, level_data)


@router.delete("/{level_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_level(level_id: int, db: DbSession, auth: CurrentUser) -> None:
    await LevelService(db).delete(level_id)
