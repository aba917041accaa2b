"""Enrollment schemas."""

from datetime import datetime
from typing import Optional

from app.models import PaymentState
from app.schemas.common import CamelModel
from app.schemas.group import GroupResponse
from app.schemas.student import StudentResponse


class EnrollmentCreate(CamelModel):
    """Enrollment creation model."""

    group_id: int
    student_id: int
    payment_state: Optional[PaymentState] = None


class EnrollmentUpdate(EnrollmentCreate):
    """Enrollment update model; a missing paymentState keeps the current one."""


class EnrollmentResponse(CamelModel):
    """Enrollment response model."""

    id: int
    enrollment_code: str
    payment_state: PaymentState
    enrollment_date: Optional[datetime] = None
    group_id: int
    student_id: int
    group: GroupResponse
    student: StudentResponse
