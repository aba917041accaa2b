"""Groups (groupes) API endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Query, status

from app.api.dependencies import CurrentUser, DbSession
from app.models import Group
from app.schemas.group import GroupCreate, GroupResponse, GroupUpdate
from app.services.catalog_service import GroupService

router = APIRouter(prefix="/groupes", tags=["groups"])


@router.get("", response_model=List[GroupResponse])
async def get_groups(
    db: DbSession,
    auth: CurrentUser,
    level_id: Optional[int] = Query(default=None, alias="levelId"),
) -> List[Group]:
    return await GroupService(db).list(level_id=level_id)


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(group_data: GroupCreate, db: DbSession, auth: CurrentUser) -> Group:
    return await GroupService(db).create(group_data)


@router.get("/{group_id}", response_model=GroupResponse)
async def get_group(group_id: int, db: DbSession, auth: CurrentUser) -> Group:
    return await GroupService(db).get(group_id)


@router.put("/{group_id}", response_model=GroupResponse)
async def update_group(
    group_id: int, group_data: GroupUpdate, db: DbSession, auth: CurrentUser
) -> Group:
    return await GroupService(db).update(group_id, group_data)


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_group(group_id: int, db: DbSession, auth: CurrentUser) -> None:
    await GroupService(db).delete(group_id)
