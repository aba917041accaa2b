"""Authentication and account-check schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.common import CamelModel
from app.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Login credentials."""

    username: str
    password: str

    class Config:
        json_schema_extra = {
            "example": {
                "username": "admin",
                "password": "admin123",
            }
        }


class TokenResponse(BaseModel):
    """Issued access token."""

    token: str


class MeResponse(BaseModel):
    """Current account."""

    user: UserResponse


class UsernameCheckRequest(BaseModel):
    username: str


class EmailCheckRequest(BaseModel):
    email: str


class AvailabilityResponse(BaseModel):
    """Result of an availability check."""

    available: bool
    message: str


class SuggestUsernamesRequest(CamelModel):
    base_username: str = Field(min_length=1)


class SuggestUsernamesResponse(BaseModel):
    suggestions: List[str]


class LiveCheckRequest(BaseModel):
    """Value typed into an admin form field."""

    value: str


class LiveCheckResponse(BaseModel):
    """Availability of the latest typed value; ``superseded`` when a newer one replaced it."""

    superseded: bool = False
    available: Optional[bool] = None
    message: Optional[str] = None
