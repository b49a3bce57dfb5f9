# academic_records/services/reference_sync.py
"""One-way copies of users/academic rows into the profiles database.

Every function is an upsert-by-id that only inserts: an existing reference row
is left as it is. Callers own the transaction (nothing here commits).
"""
from typing import Optional
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.enums import RoleId
from ..models.profiles import (
    UserReference, CareerReference, SpecialityReference, SubjectReference,
    StudentProfile, TeacherProfile,
)

logger = logging.getLogger(__name__)


async def sync_user_reference(
    db: AsyncSession,
    user,
    career_id: Optional[int] = None,
    current_cicle: Optional[int] = None,
    speciality_id: Optional[int] = None,
) -> UserReference:
    """Copy a users-db ``User`` and create the profile matching its role."""
    reference = await db.get(UserReference, user.id)
    if reference is not None:
        return reference

    reference = UserReference(
        id=user.id,
        name=user.name,
        email=user.email,
        role_id=user.role_id,
        status=user.status,
    )
    if user.role_id == RoleId.STUDENT:
        reference.student_profile = StudentProfile(
            career_id=career_id,
            current_cicle=current_cicle or 1,
        )
    elif user.role_id == RoleId.TEACHER:
        reference.teacher_profile = TeacherProfile(
            speciality_id=speciality_id,
            career_id=career_id,
        )
    db.add(reference)
    await db.flush()
    logger.info(f"User reference {user.id} synced (role {user.role_id})")
    return reference


async def sync_career_reference(db: AsyncSession, career) -> CareerReference:
    reference = await db.get(CareerReference, career.id)
    if reference is None:
        reference = CareerReference(id=career.id, name=career.name, total_cicles=career.total_cicles)
        db.add(reference)
        await db.flush()
    return reference


async def sync_speciality_reference(db: AsyncSession, speciality) -> SpecialityReference:
    reference = await db.get(SpecialityReference, speciality.id)
    if reference is None:
        reference = SpecialityReference(id=speciality.id, name=speciality.name)
        db.add(reference)
        await db.flush()
    return reference


async def sync_subject_reference(db: AsyncSession, subject) -> SubjectReference:
    reference = await db.get(SubjectReference, subject.id)
    if reference is None:
        reference = SubjectReference(
            id=subject.id,
            name=subject.name,
            career_id=subject.career_id,
            cicle_number=subject.cicle_number,
        )
        db.add(reference)
        await db.flush()
    return reference
