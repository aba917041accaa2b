"""Database models for the school administration system."""

from app.models.academic_session import AcademicSession, SessionState
from app.models.enrollment import Enrollment, PaymentState
from app.models.group import DeliveryType, Group
from app.models.level import Level
from app.models.student import Student, StudentStatus
from app.models.user import User, UserRole

__all__ = [
    "AcademicSession",
    "SessionState",
    "Level",
    "Group",
    "DeliveryType",
    "Student",
    "StudentStatus",
    "User",
    "UserRole",
    "Enrollment",
    "PaymentState",
]
