"""Dashboard API endpoints."""

from fastapi import APIRouter

from app.api.dependencies import CurrentUser, DbSession
from app.schemas.dashboard import RecentUser, RecentUsersResponse, StatsResponse
from app.services.user_service import UserService

router = APIRouter(tags=["dashboard"])


@router.get("/stats", response_model=StatsResponse)
async def get_stats(db: DbSession, auth: CurrentUser) -> StatsResponse:
    return StatsResponse(stats=await UserService(db).stats())


@router.get("/recent-users", response_model=RecentUsersResponse)
async def get_recent_users(db: DbSession, auth: CurrentUser) -> RecentUsersResponse:
    """Five most recently created accounts."""
    users = await UserService(db).recent()
    return RecentUsersResponse(users=[RecentUser.model_validate(u) for u in users])
