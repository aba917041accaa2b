"""Enrollment service."""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.errors import NotFoundError
from app.models import Enrollment, Group, Level, PaymentState, Student
from app.schemas.enrollment import EnrollmentCreate, EnrollmentUpdate
from app.services.catalog_service import GroupService
from app.utils.enrollment_code import enrollment_code_for_group

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Service for enrolling students into groups."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.group_service = GroupService(db)

    def _query(self):
        return select(Enrollment).options(
            selectinload(Enrollment.group)
            .selectinload(Group.level)
            .selectinload(Level.session),
            selectinload(Enrollment.student).selectinload(Student.user),
        )

    async def list(self) -> List[Enrollment]:
        result = await self.db.execute(
            self._query().order_by(Enrollment.enrollment_date.desc(), Enrollment.id.desc())
        )
        return list(result.scalars().all())

    async def get(self, enrollment_id: int) -> Enrollment:
        result = await self.db.execute(
            self._query()
            .where(Enrollment.id == enrollment_id)
            .execution_options(populate_existing=True)
        )
        enrollment = result.scalar_one_or_none()
        if not enrollment:
            raise NotFoundError("Enrollment not found")
        return enrollment

    async def _ensure_student(self, student_id: int) -> None:
        if await self.db.get(Student, student_id) is None:
            raise NotFoundError("Student not found")

    async def create(self, data: EnrollmentCreate) -> Enrollment:
        """Enroll a student; the code is derived from the group chain."""
        group = await self.group_service.get(data.group_id)
        await self._ensure_student(data.student_id)

        enrollment = Enrollment(
            group_id=group.id,
            student_id=data.student_id,
            enrollment_code=enrollment_code_for_group(group, data.student_id),
            payment_state=data.payment_state or PaymentState.UNPAID,
        )
        self.db.add(enrollment)
        await self.db.commit()
        logger.info(
            f"Enrolled student {data.student_id} in group {group.id} "
            f"as {enrollment.enrollment_code}"
        )
        return await self.get(enrollment.id)

    async def update(self, enrollment_id: int, data: EnrollmentUpdate) -> Enrollment:
        """Update an enrollment.

        The code is re-derived only when the group changes. A missing target
        group or student leaves the enrollment untouched.
        """
        enrollment = await self.get(enrollment_id)

        if enrollment.student_id != data.student_id:
            await self._ensure_student(data.student_id)

        if enrollment.group_id != data.group_id:
            group = await self.group_service.get(data.group_id)
            enrollment.enrollment_code = enrollment_code_for_group(group, data.student_id)
            enrollment.group_id = group.id
            logger.info(
                f"Enrollment {enrollment_id} moved to group {group.id}, "
                f"new code {enrollment.enrollment_code}"
            )

        enrollment.student_id = data.student_id
        if data.payment_state is not None:
            enrollment.payment_state = data.payment_state

        await self.db.commit()
        return await self.get(enrollment_id)

    async def delete(self, enrollment_id: int) -> None:
        enrollment = await self.get(enrollment_id)
        await self.db.delete(enrollment)
        await self.db.commit()
        logger.info(f"Deleted enrollment {enrollment_id}")
