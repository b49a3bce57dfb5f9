# academic_records/services/enrollment_service.py
"""Transactional enrollment of students into subjects.

Every operation runs as one unit of work on the profiles database: either all
of its reads and writes commit, or none do. Business-rule failures
(NotFoundError, InvalidStateError, ConflictError) leave the service untouched
after the rollback; anything else is logged and reported as InternalError.
"""
from typing import List, Optional
import logging

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.config import settings
from ..core.exceptions import BUSINESS_ERRORS, NotFoundError, InvalidStateError, ConflictError, InternalError
from ..core.unit_of_work import UnitOfWork
from ..models.enums import RoleId, UserStatus, EnrollmentStatus
from ..models.profiles import UserReference, StudentProfile, SubjectReference, StudentSubject

logger = logging.getLogger(__name__)

# No capacity column exists on subjects; every subject has the same ceiling.
MAX_STUDENTS_PER_SUBJECT = 30


class EnrollmentService:
    def __init__(self, db: AsyncSession, isolation_level: Optional[str] = None):
        self.db = db
        self.isolation_level = isolation_level or settings.enrollment_isolation_level

    def _unit_of_work(self) -> UnitOfWork:
        return UnitOfWork(self.db, isolation_level=self.isolation_level)

    async def _load_student(self, student_id: int) -> UserReference:
        stmt = (
            select(UserReference)
            .where(UserReference.id == student_id)
            .options(selectinload(UserReference.student_profile).selectinload(StudentProfile.career))
        )
        student = (await self.db.execute(stmt)).scalar_one_or_none()
        if student is None or student.role_id != RoleId.STUDENT:
            raise NotFoundError(f"Student with ID {student_id} not found")
        return student

    @staticmethod
    def _ensure_can_enroll(student: UserReference) -> StudentProfile:
        if student.status != UserStatus.ACTIVE.value:
            raise InvalidStateError(
                f"Student {student.name} is not active. Current status: {student.status}"
            )
        if student.student_profile is None:
            raise InvalidStateError(f"Student {student.name} has no academic profile")
        return student.student_profile

    async def _count_enrollments(self, subject_id: int) -> int:
        stmt = select(func.count(StudentSubject.id)).where(StudentSubject.subject_id == subject_id)
        return (await self.db.execute(stmt)).scalar_one()

    async def _find_enrollment(self, student_profile_id: int, subject_id: int) -> Optional[StudentSubject]:
        stmt = select(StudentSubject).where(
            StudentSubject.student_profile_id == student_profile_id,
            StudentSubject.subject_id == subject_id,
        )
        return (await self.db.execute(stmt)).scalars().first()

    async def enroll_student(self, student_id: int, subject_id: int) -> dict:
        """Enroll one student in one subject, checking status, career, seats and duplicates"""
        try:
            async with self._unit_of_work():
                student = await self._load_student(student_id)
                profile = self._ensure_can_enroll(student)

                subject = await self.db.get(SubjectReference, subject_id)
                if subject is None:
                    raise NotFoundError(f"Subject with ID {subject_id} not found")

                if subject.career_id != profile.career_id:
                    raise InvalidStateError(
                        f'Subject "{subject.name}" does not belong to the student\'s career'
                    )

                seats_taken = await self._count_enrollments(subject_id)
                if seats_taken >= MAX_STUDENTS_PER_SUBJECT:
                    raise InvalidStateError(
                        f'No seats available in "{subject.name}". '
                        f"Seats taken: {seats_taken}/{MAX_STUDENTS_PER_SUBJECT}"
                    )

                if await self._find_enrollment(profile.id, subject_id) is not None:
                    raise ConflictError(f'Student is already enrolled in "{subject.name}"')

                enrollment = StudentSubject(
                    student_profile_id=profile.id,
                    subject_id=subject_id,
                    status=EnrollmentStatus.ENROLLED.value,
                    grade=None,
                )
                self.db.add(enrollment)
                await self.db.flush()

                # Advisory only: nothing persists a seat counter
                slots_remaining = MAX_STUDENTS_PER_SUBJECT - seats_taken - 1
                logger.info(f"Seat taken in {subject.name}, {slots_remaining} remaining")

        except BUSINESS_ERRORS:
            raise
        except IntegrityError as e:
            logger.warning(f"Concurrent duplicate enrollment of student {student_id} in subject {subject_id}: {e}")
            raise ConflictError("Student is already enrolled in this subject")
        except Exception:
            logger.exception(f"Enrollment of student {student_id} in subject {subject_id} failed")
            raise InternalError("Enrollment failed. The transaction was rolled back.")

        career = profile.career
        return {
            "success": True,
            "message": f"{student.name} enrolled in {subject.name}",
            "data": {
                "enrollmentId": enrollment.id,
                "student": {
                    "id": student.id,
                    "name": student.name,
                    "email": student.email,
                    "career": career.name if career else None,
                },
                "subject": {
                    "id": subject.id,
                    "name": subject.name,
                    "cycle": subject.cicle_number,
                },
                "enrollmentDate": enrollment.enrolled_at.isoformat(),
                "status": enrollment.status,
                "slotsRemaining": slots_remaining,
            },
        }

    async def enroll_student_in_subjects(self, student_id: int, subject_ids: List[int]) -> dict:
        """Enroll one student in several subjects.

        Missing subjects and existing enrollments are reported per item and do
        not stop the others. The whole call is rolled back only when nothing
        could be enrolled and at least one item failed.
        """
        enrolled = []
        errors: List[str] = []
        try:
            async with self._unit_of_work():
                student = await self._load_student(student_id)
                profile = self._ensure_can_enroll(student)

                for subject_id in subject_ids:
                    subject = await self.db.get(SubjectReference, subject_id)
                    if subject is None:
                        errors.append(f"Subject with ID {subject_id} not found")
                        continue

                    if await self._find_enrollment(profile.id, subject_id) is not None:
                        errors.append(f"Already enrolled in {subject.name}")
                        continue

                    enrollment = StudentSubject(
                        student_profile_id=profile.id,
                        subject_id=subject_id,
                        status=EnrollmentStatus.ENROLLED.value,
                        grade=None,
                    )
                    try:
                        async with self.db.begin_nested():
                            self.db.add(enrollment)
                    except IntegrityError as e:
                        logger.warning(f"Bulk enrollment item {subject_id} rejected by the store: {e}")
                        errors.append(f"Error on subject ID {subject_id}: already enrolled")
                        continue
                    enrolled.append((enrollment, subject))

                if not enrolled and errors:
                    raise InvalidStateError(f"Could not enroll in any subject: {', '.join(errors)}")

        except BUSINESS_ERRORS:
            raise
        except Exception:
            logger.exception(f"Bulk enrollment of student {student_id} failed")
            raise InternalError("Bulk enrollment failed. The transaction was rolled back.")

        logger.info(f"Bulk enrollment for {student.name}: {len(enrolled)} enrolled, {len(errors)} failed")
        return {
            "success": True,
            "message": f"Bulk enrollment completed for {student.name}",
            "data": {
                "totalRequested": len(subject_ids),
                "successfulEnrollments": len(enrolled),
                "failedEnrollments": len(errors),
                "enrollments": [
                    {"id": enrollment.id, "subject": subject.name, "status": enrollment.status}
                    for enrollment, subject in enrolled
                ],
                "errors": errors,
            },
        }

    async def cancel_enrollment(self, enrollment_id: int) -> dict:
        """Delete an ungraded enrollment"""
        try:
            async with self._unit_of_work():
                stmt = (
                    select(StudentSubject)
                    .where(StudentSubject.id == enrollment_id)
                    .options(
                        selectinload(StudentSubject.student_profile).selectinload(StudentProfile.user),
                        selectinload(StudentSubject.subject),
                    )
                )
                enrollment = (await self.db.execute(stmt)).scalar_one_or_none()
                if enrollment is None:
                    raise NotFoundError(f"Enrollment with ID {enrollment_id} not found")

                # Graded enrollments are part of the academic record
                if enrollment.grade is not None:
                    raise InvalidStateError("Cannot cancel an enrollment that already has a grade")

                student_name = enrollment.student_profile.user.name
                subject_name = enrollment.subject.name
                await self.db.delete(enrollment)
                await self.db.flush()
                logger.info(f"Seat released in {subject_name}")

        except BUSINESS_ERRORS:
            raise
        except Exception:
            logger.exception(f"Cancellation of enrollment {enrollment_id} failed")
            raise InternalError("Error cancelling enrollment")

        return {
            "success": True,
            "message": "Enrollment cancelled successfully",
            "data": {
                "enrollmentId": enrollment_id,
                "student": student_name,
                "subject": subject_name,
            },
        }
