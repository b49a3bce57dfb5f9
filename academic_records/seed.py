# academic_records/seed.py
"""Demo data for the three databases.

Every insert is skipped when the row already exists, so seeding twice is a
no-op. Profiles rows are written through the same reference sync that user,
career and subject creation use.
"""
from datetime import date
import logging

import bcrypt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models.enums import RoleId, EnrollmentStatus
from .models.users import Role, User
from .models.academic import Speciality, Career, Cycle, Subject
from .models.profiles import StudentProfile, TeacherProfile, StudentSubject, SubjectAssignment
from .services.reference_sync import (
    sync_user_reference, sync_career_reference, sync_speciality_reference, sync_subject_reference,
)

logger = logging.getLogger(__name__)

ROLES = [
    {"id": RoleId.ADMIN.value, "name": "ADMIN"},
    {"id": RoleId.TEACHER.value, "name": "TEACHER"},
    {"id": RoleId.STUDENT.value, "name": "STUDENT"},
]

SPECIALITIES = [
    {"id": 1, "name": "Technology", "description": "Technology speciality"},
    {"id": 2, "name": "Health", "description": "Health speciality"},
    {"id": 3, "name": "Social Sciences", "description": "Social sciences speciality"},
]

CAREERS = [
    {"id": 1, "name": "Software Engineering", "total_cicles": 10, "duration_years": 5},
    {"id": 2, "name": "Medicine", "total_cicles": 12, "duration_years": 6},
]

ACTIVE_CYCLE = {
    "id": 1,
    "name": "2025-1",
    "year": 2025,
    "period": 1,
    "start_date": date(2025, 1, 15),
    "end_date": date(2025, 6, 30),
    "is_active": True,
}

SUBJECTS = [
    {"id": 1, "name": "Programming I", "career_id": 1, "cicle_number": 1, "cycle_id": 1},
    {"id": 2, "name": "Mathematics I", "career_id": 1, "cicle_number": 1, "cycle_id": 1},
    {"id": 3, "name": "Introduction to Engineering", "career_id": 1, "cicle_number": 1, "cycle_id": 1},
    {"id": 4, "name": "Programming II", "career_id": 1, "cicle_number": 2, "cycle_id": 1},
    {"id": 5, "name": "Data Structures", "career_id": 1, "cicle_number": 2, "cycle_id": 1},
    {"id": 6, "name": "Databases", "career_id": 1, "cicle_number": 3, "cycle_id": 1},
    {"id": 7, "name": "Web Development", "career_id": 1, "cicle_number": 3, "cycle_id": 1},
]

TEACHERS = [
    {"id": 100, "name": "Dr. Carlos Mendez", "email": "carlos.mendez@example.edu",
     "speciality_id": 1, "career_id": 1, "subject_ids": [1, 4, 6]},
    {"id": 101, "name": "Eng. Maria Lopez", "email": "maria.lopez@example.edu",
     "speciality_id": 1, "career_id": 1, "subject_ids": [2, 3]},
]

STUDENTS = [
    {"id": 200, "name": "Juan Perez", "email": "juan.perez@example.edu", "phone": "0987654321",
     "age": 20, "status": "active", "career_id": 1, "current_cicle": 1, "subject_ids": [1, 2, 3]},
    {"id": 201, "name": "Maria Garcia", "email": "maria.garcia@example.edu", "phone": "0987654322",
     "age": 19, "status": "active", "career_id": 1, "current_cicle": 1, "subject_ids": [1, 2]},
    {"id": 202, "name": "Pedro Sanchez", "email": "pedro.sanchez@example.edu", "phone": "0987654323",
     "age": 21, "status": "active", "career_id": 1, "current_cicle": 2, "subject_ids": [4, 5]},
    {"id": 203, "name": "Ana Rodriguez", "email": "ana.rodriguez@example.edu", "phone": "0987654324",
     "age": 20, "status": "suspended", "career_id": 1, "current_cicle": 1, "subject_ids": []},
]

TEACHER_PASSWORD = "teacher123"
STUDENT_PASSWORD = "student123"


async def _get_or_add(db: AsyncSession, model, values: dict):
    obj = await db.get(model, values["id"])
    if obj is None:
        obj = model(**values)
        db.add(obj)
    return obj


async def _ensure_user(db: AsyncSession, values: dict, role_id: int, password_hash: str) -> User:
    user = (await db.execute(select(User).where(User.email == values["email"]))).scalars().first()
    if user is None:
        user = User(
            id=values["id"],
            name=values["name"],
            email=values["email"],
            password=password_hash,
            phone=values.get("phone"),
            age=values.get("age"),
            role_id=role_id,
            status=values.get("status", "active"),
        )
        db.add(user)
    return user


async def seed_academic(academic_db: AsyncSession, profiles_db: AsyncSession) -> None:
    """Specialities, careers, the active cycle and subjects, plus their references"""
    specialities = [await _get_or_add(academic_db, Speciality, s) for s in SPECIALITIES]
    careers = [await _get_or_add(academic_db, Career, c) for c in CAREERS]
    await _get_or_add(academic_db, Cycle, ACTIVE_CYCLE)
    await academic_db.flush()
    subjects = [await _get_or_add(academic_db, Subject, s) for s in SUBJECTS]
    await academic_db.commit()

    for speciality in specialities:
        await sync_speciality_reference(profiles_db, speciality)
    for career in careers:
        await sync_career_reference(profiles_db, career)
    for subject in subjects:
        await sync_subject_reference(profiles_db, subject)
    await profiles_db.commit()


async def seed_people(users_db: AsyncSession, profiles_db: AsyncSession, hash_rounds: int = 10) -> None:
    """Roles, two teachers with assignments, four students with enrollments"""
    for role in ROLES:
        await _get_or_add(users_db, Role, role)
    await users_db.flush()

    teacher_hash = bcrypt.hashpw(TEACHER_PASSWORD.encode("utf-8"), bcrypt.gensalt(hash_rounds)).decode("utf-8")
    student_hash = bcrypt.hashpw(STUDENT_PASSWORD.encode("utf-8"), bcrypt.gensalt(hash_rounds)).decode("utf-8")

    teachers = [(await _ensure_user(users_db, t, RoleId.TEACHER.value, teacher_hash), t) for t in TEACHERS]
    students = [(await _ensure_user(users_db, s, RoleId.STUDENT.value, student_hash), s) for s in STUDENTS]
    await users_db.commit()

    for user, values in teachers:
        await sync_user_reference(
            profiles_db, user, career_id=values["career_id"], speciality_id=values["speciality_id"]
        )
    for user, values in students:
        await sync_user_reference(
            profiles_db, user, career_id=values["career_id"], current_cicle=values["current_cicle"]
        )
    await profiles_db.flush()

    for user, values in teachers:
        profile = (await profiles_db.execute(
            select(TeacherProfile).where(TeacherProfile.user_id == user.id)
        )).scalar_one()
        for subject_id in values["subject_ids"]:
            exists = (await profiles_db.execute(
                select(SubjectAssignment.id).where(
                    SubjectAssignment.teacher_profile_id == profile.id,
                    SubjectAssignment.subject_id == subject_id,
                )
            )).first()
            if exists is None:
                profiles_db.add(SubjectAssignment(teacher_profile_id=profile.id, subject_id=subject_id))

    for user, values in students:
        profile = (await profiles_db.execute(
            select(StudentProfile).where(StudentProfile.user_id == user.id)
        )).scalar_one()
        for subject_id in values["subject_ids"]:
            exists = (await profiles_db.execute(
                select(StudentSubject.id).where(
                    StudentSubject.student_profile_id == profile.id,
                    StudentSubject.subject_id == subject_id,
                )
            )).first()
            if exists is None:
                profiles_db.add(StudentSubject(
                    student_profile_id=profile.id,
                    subject_id=subject_id,
                    status=EnrollmentStatus.ENROLLED.value,
                    grade=None,
                ))

    await profiles_db.commit()


async def seed_all(
    users_db: AsyncSession,
    academic_db: AsyncSession,
    profiles_db: AsyncSession,
    hash_rounds: int = 10,
) -> None:
    await seed_academic(academic_db, profiles_db)
    await seed_people(users_db, profiles_db, hash_rounds=hash_rounds)
    logger.info(
        f"Seed complete: {len(CAREERS)} careers, {len(SUBJECTS)} subjects, "
        f"{len(TEACHERS)} teachers, {len(STUDENTS)} students"
    )
