# academic_records/services/teacher_service.py
from typing import Optional
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.exceptions import NotFoundError, ConflictError
from ..models.enums import RoleId, UserStatus
from ..models.profiles import (
    UserReference, TeacherProfile, SubjectAssignment, SubjectReference, CareerReference, SpecialityReference,
)
from ..schemas.profile_schemas import TeacherOut
from ..utils.pagination import Paginator
from .base_service import BaseService
from .filters import AllOf, Not, FieldEquals, HasAssignment, TEACHER_FIELDS

logger = logging.getLogger(__name__)

TEACHER_LOAD_OPTIONS = (
    selectinload(UserReference.teacher_profile).selectinload(TeacherProfile.speciality),
    selectinload(UserReference.teacher_profile).selectinload(TeacherProfile.career),
    selectinload(UserReference.teacher_profile)
    .selectinload(TeacherProfile.subjects)
    .selectinload(SubjectAssignment.subject),
)


class TeacherService(BaseService[UserReference]):
    def __init__(self, db: AsyncSession):
        super().__init__(UserReference, db)

    @staticmethod
    def dump(teacher: UserReference) -> dict:
        return TeacherOut.model_validate(teacher).model_dump(mode="json")

    async def list_teachers(self, page: int = 1, size: int = 10) -> dict:
        return await self.get_paginated(
            page=page,
            size=size,
            where=[UserReference.role_id == RoleId.TEACHER.value],
            options=TEACHER_LOAD_OPTIONS,
        )

    async def list_teachers_with_multiple_subjects(self, page: int = 1, size: int = 10) -> dict:
        """Teachers assigned to more than one subject, paginated after filtering"""
        stmt = (
            select(UserReference)
            .where(UserReference.role_id == RoleId.TEACHER.value)
            .options(*TEACHER_LOAD_OPTIONS)
            .order_by(UserReference.id)
        )
        teachers = (await self.db.execute(stmt)).scalars().all()
        matching = [
            t for t in teachers
            if t.teacher_profile is not None and len(t.teacher_profile.subjects) > 1
        ]
        items = []
        for teacher in Paginator.paginate_list(matching, page, size):
            item = self.dump(teacher)
            item["subjects_count"] = len(teacher.teacher_profile.subjects)
            items.append(item)
        return Paginator.create_response(
            items, page, size, len(matching),
            additional_info={"message": "Teachers assigned to more than one subject"},
        )

    async def find_teachers_with_logical_operators(
        self,
        exclude_inactive: bool = True,
        is_full_time: bool = False,
        has_subjects: bool = False,
        speciality_id: Optional[int] = None,
        career_id: Optional[int] = None,
    ) -> dict:
        """Teachers filtered with NOT inactive / active ("full time") / has subjects / speciality / career"""
        conditions = [FieldEquals("role", RoleId.TEACHER)]
        if exclude_inactive:
            conditions.append(Not(FieldEquals("status", UserStatus.INACTIVE)))
        # No contract type is stored; an active teacher counts as full time
        if is_full_time:
            conditions.append(FieldEquals("status", UserStatus.ACTIVE))
        if has_subjects:
            conditions.append(HasAssignment())
        if speciality_id:
            conditions.append(FieldEquals("speciality_id", speciality_id))
        if career_id:
            conditions.append(FieldEquals("career_id", career_id))

        stmt = (
            select(UserReference)
            .outerjoin(TeacherProfile, TeacherProfile.user_id == UserReference.id)
            .where(AllOf(*conditions).compile(TEACHER_FIELDS))
            .options(*TEACHER_LOAD_OPTIONS)
            .order_by(UserReference.id)
        )
        teachers = (await self.db.execute(stmt)).scalars().all()

        return {
            "message": "Teachers filtered with logical operators",
            "filters": {
                "exclude_inactive": exclude_inactive,
                "is_full_time": is_full_time,
                "has_subjects": has_subjects,
                "speciality_id": speciality_id,
                "career_id": career_id,
            },
            "data": [self.dump(t) for t in teachers],
            "total": len(teachers),
        }

    async def get_teacher(self, teacher_id: int) -> UserReference:
        teacher = await self.get(teacher_id, options=TEACHER_LOAD_OPTIONS)
        if teacher is None or teacher.role_id != RoleId.TEACHER:
            raise NotFoundError(f"Teacher with ID {teacher_id} not found")
        return teacher

    async def update_teacher(self, teacher_id: int, changes: dict) -> UserReference:
        teacher = await self.get_teacher(teacher_id)
        if changes.get("email"):
            stmt = select(UserReference.id).where(
                UserReference.email == changes["email"], UserReference.id != teacher_id
            )
            if (await self.db.execute(stmt)).first() is not None:
                raise ConflictError(f"User with email {changes['email']} already exists")
        for key, reference, label in (
            ("speciality_id", SpecialityReference, "Speciality"),
            ("career_id", CareerReference, "Career"),
        ):
            if changes.get(key) is not None and await self.db.get(reference, changes[key]) is None:
                raise NotFoundError(f"{label} with ID {changes[key]} not found")

        for key in ("name", "email"):
            if changes.get(key) is not None:
                setattr(teacher, key, changes[key])

        profile = teacher.teacher_profile
        if profile is not None:
            for key in ("speciality_id", "career_id"):
                if changes.get(key) is not None:
                    setattr(profile, key, changes[key])

        await self.db.commit()
        self.db.expire_all()
        return await self.get_teacher(teacher_id)

    async def delete_teacher(self, teacher_id: int) -> dict:
        teacher = await self.get_teacher(teacher_id)
        await self.delete(teacher)
        logger.warning(f"Teacher {teacher_id} removed from profiles; the users database row is kept")
        return {"message": f"Teacher with ID {teacher_id} has been successfully removed"}

    async def assign_subject(self, teacher_id: int, subject_id: int) -> SubjectAssignment:
        teacher = await self.get_teacher(teacher_id)
        if teacher.teacher_profile is None:
            raise NotFoundError(f"Teacher with ID {teacher_id} has no profile")

        if await self.db.get(SubjectReference, subject_id) is None:
            raise NotFoundError(f"Subject with ID {subject_id} not found")

        assignment = SubjectAssignment(teacher_profile_id=teacher.teacher_profile.id, subject_id=subject_id)
        self.db.add(assignment)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(f"Teacher {teacher_id} is already assigned to subject {subject_id}")
        return assignment
