"""Group schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.models import DeliveryType
from app.schemas.common import CamelModel
from app.schemas.level import LevelResponse


class GroupCreate(CamelModel):
    """Group creation model."""

    name: str = Field(min_length=1)
    capacity: int = Field(gt=0)
    delivery_type: DeliveryType = Field(default=DeliveryType.ON_SITE, alias="type")
    level_id: int


class GroupUpdate(GroupCreate):
    """Group update model."""


class GroupResponse(CamelModel):
    """Group response model."""

    id: int
    name: str
    capacity: int
    delivery_type: DeliveryType = Field(alias="type")
    level_id: int
    created_at: Optional[datetime] = None
    level: LevelResponse
