"""User account schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.models import UserRole
from app.schemas.common import CamelModel


class UserCreate(CamelModel):
    """User creation model."""

    display_name: str = Field(min_length=1)
    username: str = Field(min_length=1)
    email: str = Field(min_length=3)
    contact: Optional[str] = None
    password: str = Field(min_length=1)
    role: UserRole = UserRole.STAFF


class UserUpdate(CamelModel):
    """User update model."""

    display_name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    contact: Optional[str] = None
    role: Optional[UserRole] = None
    password: Optional[str] = None


class UserResponse(CamelModel):
    """User response model (never exposes the password hash)."""

    id: int
    display_name: str
    username: str
    email: str
    contact: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None


class UserSummary(CamelModel):
    """Account fields shown next to a student."""

    username: str
    email: str
    role: UserRole
