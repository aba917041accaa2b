"""Student schemas."""

from datetime import date, datetime
from typing import Optional

from pydantic import Field

from app.models import StudentStatus
from app.schemas.common import CamelModel
from app.schemas.user import UserSummary


class StudentCreate(CamelModel):
    """Student creation model; also creates the student's account."""

    name: str = Field(min_length=1)
    surname: str = Field(min_length=1)
    birth_date: date
    address: str
    national_id: str = Field(min_length=1)
    status: StudentStatus = StudentStatus.STUDENT

    # Account
    username: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)


class StudentUpdate(CamelModel):
    """Student update model. Unset fields are left unchanged."""

    name: Optional[str] = None
    surname: Optional[str] = None
    birth_date: Optional[date] = None
    address: Optional[str] = None
    national_id: Optional[str] = None
    status: Optional[StudentStatus] = None
    username: Optional[str] = None
    email: Optional[str] = None


class StudentResponse(CamelModel):
    """Student response model."""

    id: int
    name: str
    surname: str
    birth_date: date
    address: str
    national_id: str
    status: StudentStatus
    photo_path: Optional[str] = None
    user_id: int
    created_at: Optional[datetime] = None
    user: UserSummary
