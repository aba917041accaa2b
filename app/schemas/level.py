"""Level schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.session import SessionResponse


class LevelCreate(CamelModel):
    """Level creation model."""

    name: str = Field(min_length=1)
    session_id: int


class LevelUpdate(LevelCreate):
    """Level update model."""


class SessionLevelCreate(CamelModel):
    """Level created from inside a session."""

    name: str = Field(min_length=1)


class LevelResponse(CamelModel):
    """Level response model."""

    id: int
    name: str
    session_id: int
    created_at: Optional[datetime] = None
    session: SessionResponse
