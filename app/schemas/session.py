"""Session schemas."""

from datetime import date, datetime
from typing import Optional

from pydantic import model_validator

from app.models import SessionState
from app.schemas.common import CamelModel


class SessionCreate(CamelModel):
    """Session creation model."""

    name: str
    start_date: date
    end_date: date
    state: SessionState = SessionState.ONGOING

    @model_validator(mode="after")
    def check_dates(self) -> "SessionCreate":
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class SessionUpdate(SessionCreate):
    """Session update model (full replacement)."""


class SessionResponse(CamelModel):
    """Session response model."""

    id: int
    name: str
    start_date: date
    end_date: date
    state: SessionState
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
