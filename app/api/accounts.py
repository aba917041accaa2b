"""Username/email availability endpoints used while creating accounts."""

from fastapi import APIRouter

from app.api.dependencies import DbSession
from app.schemas.auth import (
    AvailabilityResponse,
    EmailCheckRequest,
    SuggestUsernamesRequest,
    SuggestUsernamesResponse,
    UsernameCheckRequest,
)
from app.services.account_service import AccountService

router = APIRouter(tags=["accounts"])


@router.post("/check-username", response_model=AvailabilityResponse)
async def check_username(data: UsernameCheckRequest, db: DbSession) -> AvailabilityResponse:
    result = await AccountService(db).check_username(data.username)
    return AvailabilityResponse(available=result.available, message=result.message)


@router.post("/check-email", response_model=AvailabilityResponse)
async def check_email(data: EmailCheckRequest, db: DbSession) -> AvailabilityResponse:
    result = await AccountService(db).check_email(data.email)
    return AvailabilityResponse(available=result.available, message=result.message)


@router.post("/suggest-usernames", response_model=SuggestUsernamesResponse)
async def suggest_usernames(
    data: SuggestUsernamesRequest, db: DbSession
) -> SuggestUsernamesResponse:
    """Propose up to eight free usernames derived from ``baseUsername``."""
    suggestions = await AccountService(db).suggest_usernames(data.base_username)
    return SuggestUsernamesResponse(suggestions=suggestions)
