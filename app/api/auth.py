"""Authentication API endpoints."""

from fastapi import APIRouter

from app.api.dependencies import CurrentUser, DbSession
from app.schemas.auth import LoginRequest, MeResponse, TokenResponse
from app.schemas.user import UserResponse
from app.services.account_service import AccountService

router = APIRouter(tags=["authentication"])


@router.post("/login", response_model=TokenResponse)
async def login(data: LoginRequest, db: DbSession) -> TokenResponse:
    """Authenticate user and return access token."""
    token = await AccountService(db).authenticate(data.username, data.password)
    return TokenResponse(token=token)


@router.get("/me", response_model=MeResponse)
async def read_me(auth: CurrentUser) -> MeResponse:
    """Return the account behind the bearer token."""
    return MeResponse(user=UserResponse.model_validate(auth.user))
