"""Student service: student records, their accounts and photos."""

import logging
import re
import time
from pathlib import Path
from typing import List, Optional

from fastapi import UploadFile
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.errors import NotFoundError, ValidationError
from app.core.security import get_password_hash
from app.core.settings import settings
from app.models import Student, User, UserRole
from app.schemas.student import StudentCreate, StudentUpdate

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def safe_upload_name(filename: str, now_ms: Optional[int] = None) -> str:
    """Timestamped file name with anything outside ``[a-zA-Z0-9.-]`` replaced."""
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{now_ms}-{_UNSAFE_FILENAME_CHARS.sub('_', filename)}"


async def save_photo(photo: UploadFile) -> Optional[str]:
    """Store an uploaded photo and return its public path, or None if empty."""
    content = await photo.read()
    if not content:
        return None

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)

    file_name = safe_upload_name(photo.filename or "photo")
    (upload_dir / file_name).write_bytes(content)
    logger.info(f"Saved student photo {file_name} ({len(content)} bytes)")
    return f"{UPLOADS_URL_PREFIX}/{file_name}"


def remove_photo(photo_path: str) -> None:
    """Delete a stored photo given its public path."""
    file_name = photo_path.rsplit("/", 1)[-1]
    (Path(settings.upload_dir) / file_name).unlink(missing_ok=True)
    logger.info(f"Removed student photo {file_name}")


class StudentService:
    """CRUD for students; each student owns exactly one user account."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _query(self):
        return select(Student).options(selectinload(Student.user))

    async def list(self) -> List[Student]:
        result = await self.db.execute(self._query().order_by(Student.id.desc()))
        return list(result.scalars().all())

    async def get(self, student_id: int) -> Student:
        result = await self.db.execute(
            self._query()
            .where(Student.id == student_id)
            .execution_options(populate_existing=True)
        )
        student = result.scalar_one_or_none()
        if not student:
            raise NotFoundError("Student not found")
        return student

    async def create(self, data: StudentCreate) -> Student:
        """Create a student and its STUDENT account in one commit."""
        existing = await self.db.execute(
            select(User.id).where(
                or_(User.username == data.username, User.email == data.email)
            )
        )
        if existing.first() is not None:
            raise ValidationError("Username or email already in use")

        existing = await self.db.execute(
            select(Student.id).where(Student.national_id == data.national_id)
        )
        if existing.first() is not None:
            raise ValidationError("National ID already in use")

        user = User(
            display_name=f"{data.name} {data.surname}",
            username=data.username,
            email=data.email,
            password_hash=get_password_hash(data.password),
            role=UserRole.STUDENT,
        )
        student = Student(
            name=data.name,
            surname=data.surname,
            birth_date=data.birth_date,
            address=data.address,
            national_id=data.national_id,
            status=data.status,
            user=user,
        )
        self.db.add(student)
        await self.db.commit()
        logger.info(f"Created student '{student.full_name}' (id={student.id})")
        return await self.get(student.id)

    async def _ensure_unique(self, student: Student, changes: dict) -> None:
        """Reject identifiers already held by another account or student."""
        username = changes.get("username")
        email = changes.get("email")
        if username or email:
            clauses = []
            if username:
                clauses.append(User.username == username)
            if email:
                clauses.append(User.email == email)
            existing = await self.db.execute(
                select(User.id).where(or_(*clauses), User.id != student.user_id)
            )
            if existing.first() is not None:
                raise ValidationError("Username or email already in use")

        national_id = changes.get("national_id")
        if national_id:
            existing = await self.db.execute(
                select(Student.id).where(
                    Student.national_id == national_id, Student.id != student.id
                )
            )
            if existing.first() is not None:
                raise ValidationError("National ID already in use")

    async def update(
        self,
        student_id: int,
        data: StudentUpdate,
        photo: Optional[UploadFile] = None,
    ) -> Student:
        """Update a student, its account identifiers and optionally its photo.

        The photo is written only once the row changes have been flushed, and
        removed again if the commit fails.
        """
        student = await self.get(student_id)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        await self._ensure_unique(student, changes)

        account_changes = {
            key: changes.pop(key) for key in ("username", "email") if key in changes
        }
        for field, value in changes.items():
            setattr(student, field, value)
        for field, value in account_changes.items():
            setattr(student.user, field, value)
        await self.db.flush()

        photo_path = await save_photo(photo) if photo is not None else None
        if photo_path:
            student.photo_path = photo_path

        try:
            await self.db.commit()
        except Exception:
            if photo_path:
                remove_photo(photo_path)
            raise
        return await self.get(student_id)

    async def delete(self, student_id: int) -> None:
        """Delete a student together with its account and enrollments."""
        student = await self.get(student_id)
        await self.db.delete(student.user)
        await self.db.commit()
        logger.info(f"Deleted student {student_id}")
