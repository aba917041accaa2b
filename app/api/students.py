"""Students API endpoints."""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, File, Form, UploadFile, status

from app.api.dependencies import CurrentUser, DbSession
from app.models import Student, StudentStatus
from app.schemas.student import StudentCreate, StudentResponse, StudentUpdate
from app.services.student_service import StudentService

router = APIRouter(prefix="/students", tags=["students"])


@router.get("", response_model=List[StudentResponse])
async def get_students(db: DbSession, auth: CurrentUser) -> List[Student]:
    """Get all students with their account summary."""
    return await StudentService(db).list()


@router.get("/{student_id}", response_model=StudentResponse)
async def get_student(student_id: int, db: DbSession, auth: CurrentUser) -> Student:
    """Get student by ID."""
    return await StudentService(db).get(student_id)


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
async def create_student(
    student_data: StudentCreate,
    db: DbSession,
    auth: CurrentUser,
) -> Student:
    """Create new student together with its STUDENT account."""
    return await StudentService(db).create(student_data)


@router.put("/{student_id}", response_model=StudentResponse)
async def update_student(
    student_id: int,
    db: DbSession,
    auth: CurrentUser,
    name: Optional[str] = Form(default=None),
    surname: Optional[str] = Form(default=None),
    birth_date: Optional[date] = Form(default=None, alias="birthDate"),
    address: Optional[str] = Form(default=None),
    national_id: Optional[str] = Form(default=None, alias="nationalId"),
    student_status: Optional[StudentStatus] = Form(default=None, alias="status"),
    username: Optional[str] = Form(default=None),
    email: Optional[str] = Form(default=None),
    photo: Optional[UploadFile] = File(default=None),
) -> Student:
    """Update student from multipart form data, with an optional photo."""
    student_data = StudentUpdate(
        name=name,
        surname=surname,
        birth_date=birth_date,
        address=address,
        national_id=national_id,
        status=student_status,
        username=username,
        email=email,
    )
    return await StudentService(db).update(student_id, student_data, photo=photo)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(student_id: int, db: DbSession, auth: CurrentUser) -> None:
    """Delete student, its account and its enrollments."""
    await StudentService(db).delete(student_id)
