"""Enrollments (inscriptions) API endpoints."""

from typing import List

from fastapi import APIRouter, status

from app.api.dependencies import CurrentUser, DbSession
from app.models import Enrollment
from app.schemas.enrollment import EnrollmentCreate, EnrollmentResponse, EnrollmentUpdate
from app.services.enrollment_service import EnrollmentService

router = APIRouter(prefix="/inscriptions", tags=["enrollments"])


@router.get("", response_model=List[EnrollmentResponse])
async def get_enrollments(db: DbSession, auth: CurrentUser) -> List[Enrollment]:
    """Get all enrollments, most recent first."""
    return await EnrollmentService(db).list()


@router.post("", response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED)
async def create_enrollment(
    enrollment_data: EnrollmentCreate,
    db: DbSession,
    auth: CurrentUser,
) -> Enrollment:
    """Enroll a student into a group and derive its enrollment code."""
    return await EnrollmentService(db).create(enrollment_data)


@router.get("/{enrollment_id}", response_model=EnrollmentResponse)
async def get_enrollment(enrollment_id: int, db: DbSession, auth: CurrentUser) -> Enrollment:
    return await EnrollmentService(db).get(enrollment_id)


@router.put("/{enrollment_id}", response_model=EnrollmentResponse)
async def update_enrollment(
    enrollment_id: int,
    enrollment_data: EnrollmentUpdate,
    db: DbSession,
    auth: CurrentUser,
) -> Enrollment:
    """Update enrollment; the code changes only when the group does."""
    return await EnrollmentService(db).update(enrollment_id, enrollment_data)


@router.delete("/{enrollment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_enrollment(enrollment_id: int, db: DbSession, auth: CurrentUser) -> None:
    await EnrollmentService(db).delete(enrollment_id)
