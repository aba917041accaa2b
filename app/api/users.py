"""User accounts API endpoints."""

from typing import List

from fastapi import APIRouter, status

from app.api.dependencies import CurrentUser, DbSession
from app.models import User
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserResponse])
async def get_users(db: DbSession, auth: CurrentUser) -> List[User]:
    return await UserService(db).list()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(user_data: UserCreate, db: DbSession, auth: CurrentUser) -> User:
    return await UserService(db).create(user_data)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: DbSession, auth: CurrentUser) -> User:
    return await UserService(db).get(user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int, user_data: UserUpdate, db: DbSession, auth: CurrentUser
) -> User:
    return await UserService(db).update(user_id, user_data)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, db: DbSession, auth: CurrentUser) -> None:
    """Delete account; a linked student profile goes with it."""
    await UserService(db).delete(user_id)
