"""Group model."""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SQLEnum, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class DeliveryType(str, Enum):
    """How a group's lessons are delivered."""

    ON_SITE = "ON_SITE"
    ONLINE = "ONLINE"
    HYBRID = "HYBRID"


class Group(Base):
    """Group (groupe) of students inside a level."""

    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    delivery_type: Mapped[DeliveryType] = mapped_column(
        SQLEnum(DeliveryType), default=DeliveryType.ON_SITE, nullable=False
    )
    level_id: Mapped[int] = mapped_column(ForeignKey("levels.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Relationships
    level: Mapped["Level"] = relationship("Level", back_populates="groups")
    enrollments: Mapped[list["Enrollment"]] = relationship(
        "Enrollment", back_populates="group", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name='{self.name}', capacity={self.capacity})>"
