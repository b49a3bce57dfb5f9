# academic_records/services/student_service.py
from typing import Optional
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.exceptions import NotFoundError, ConflictError
from ..models.enums import RoleId, UserStatus
from ..models.profiles import UserReference, StudentProfile, StudentSubject, CareerReference
from ..schemas.profile_schemas import StudentOut, EnrollmentOut, CareerReferenceOut
from .base_service import BaseService

logger = logging.getLogger(__name__)

STUDENT_LOAD_OPTIONS = (
    selectinload(UserReference.student_profile).selectinload(StudentProfile.career),
    selectinload(UserReference.student_profile)
    .selectinload(StudentProfile.student_subjects)
    .selectinload(StudentSubject.subject),
)


class StudentService(BaseService[UserReference]):
    """Students as seen from the profiles database (reference row + profile)."""

    def __init__(self, db: AsyncSession):
        super().__init__(UserReference, db)

    @staticmethod
    def dump(student: UserReference) -> dict:
        return StudentOut.model_validate(student).model_dump(mode="json")

    async def list_students(self, page: int = 1, size: int = 10) -> dict:
        return await self.get_paginated(
            page=page,
            size=size,
            where=[UserReference.role_id == RoleId.STUDENT.value],
            options=STUDENT_LOAD_OPTIONS,
        )

    async def list_active_students(self, page: int = 1, size: int = 10) -> dict:
        """Active students together with their career and enrollments"""
        return await self.get_paginated(
            page=page,
            size=size,
            where=[
                UserReference.role_id == RoleId.STUDENT.value,
                UserReference.status == UserStatus.ACTIVE.value,
            ],
            options=STUDENT_LOAD_OPTIONS,
        )

    async def get_student(self, student_id: int) -> UserReference:
        student = await self.get(student_id, options=STUDENT_LOAD_OPTIONS)
        if student is None or student.role_id != RoleId.STUDENT:
            raise NotFoundError(f"Student with ID {student_id} not found")
        return student

    async def get_student_enrollments(self, student_id: int, cycle_number: Optional[int] = None) -> dict:
        """Enrollments of a student, optionally only subjects taught in ``cycle_number``"""
        student = await self.get_student(student_id)
        profile = student.student_profile
        enrollments = profile.student_subjects if profile else []
        if cycle_number is not None:
            enrollments = [e for e in enrollments if e.subject and e.subject.cicle_number == cycle_number]

        career = profile.career if profile else None
        return {
            "message": f"Enrollments of student {student.name}",
            "student": {
                "id": student.id,
                "name": student.name,
                "email": student.email,
                "career": CareerReferenceOut.model_validate(career).model_dump() if career else None,
                "current_cycle": profile.current_cicle if profile else None,
                "enrollments": [EnrollmentOut.model_validate(e).model_dump(mode="json") for e in enrollments],
            },
        }

    async def _ensure_unique_email(self, email: str, user_id: int):
        stmt = select(UserReference.id).where(UserReference.email == email, UserReference.id != user_id)
        if (await self.db.execute(stmt)).first() is not None:
            raise ConflictError(f"User with email {email} already exists")

    async def update_student(self, student_id: int, changes: dict) -> UserReference:
        """Update the reference row and profile. The users database is not touched."""
        student = await self.get_student(student_id)
        if changes.get("email"):
            await self._ensure_unique_email(changes["email"], student_id)
        if changes.get("career_id") is not None and await self.db.get(CareerReference, changes["career_id"]) is None:
            raise NotFoundError(f"Career with ID {changes['career_id']} not found")

        for key in ("name", "email", "status"):
            if changes.get(key) is not None:
                setattr(student, key, changes[key])

        profile = student.student_profile
        if profile is not None:
            if changes.get("career_id") is not None:
                profile.career_id = changes["career_id"]
            if changes.get("current_cicle") is not None:
                profile.current_cicle = changes["current_cicle"]

        await self.db.commit()
        self.db.expire_all()
        return await self.get_student(student_id)

    async def delete_student(self, student_id: int) -> dict:
        """Remove the student from the profiles database (profile and enrollments cascade)"""
        student = await self.get_student(student_id)
        await self.delete(student)
        logger.warning(f"Student {student_id} removed from profiles; the users database row is kept")
        return {"message": f"Student with ID {student_id} has been successfully removed"}
