"""Dashboard schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from app.schemas.common import CamelModel


class StatItem(BaseModel):
    """One dashboard card."""

    title: str
    value: int
    description: str
    icon: str


class StatsResponse(BaseModel):
    stats: List[StatItem]


class RecentUser(CamelModel):
    id: int
    display_name: str
    username: str
    email: str
    created_at: Optional[datetime] = None


class RecentUsersResponse(BaseModel):
    users: List[RecentUser]
