"""Enrollment model."""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SQLEnum, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class PaymentState(str, Enum):
    """Fee payment state of an enrollment."""

    PAID = "PAID"
    UNPAID = "UNPAID"
    PARTIAL = "PARTIAL"


class Enrollment(Base):
    """Enrollment (inscription) of a student into a group."""

    __tablename__ = "enrollments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    enrollment_code: Mapped[str] = mapped_column(String(50), nullable=False)
    payment_state: Mapped[PaymentState] = mapped_column(
        SQLEnum(PaymentState), default=PaymentState.UNPAID, nullable=False
    )
    enrollment_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    group_id: Mapped[int] = mapped_column(ForeignKey("groups.id"), nullable=False)
    student_id: Mapped[int] = mapped_column(ForeignKey("students.id"), nullable=False)

    # Relationships
    group: Mapped["Group"] = relationship("Group", back_populates="enrollments")
    student: Mapped["Student"] = relationship("Student", back_populates="enrollments")

    def __repr__(self) -> str:
        return (
            f"<Enrollment(id={self.id}, code='{self.enrollment_code}', "
            f"payment_state={self.payment_state})>"
        )
