# academic_records/services/query_service.py
"""Read-only student searches built from composable filters."""
from typing import List, Optional
import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import InternalError
from ..models.enums import RoleId
from ..models.profiles import UserReference, StudentProfile
from ..schemas.profile_schemas import StudentOut
from .filters import Filter, AllOf, Not, FieldEquals, HasEnrollment, STUDENT_FIELDS, field_in
from .student_service import STUDENT_LOAD_OPTIONS

logger = logging.getLogger(__name__)


class QueryService:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _students_stmt(self, expr: Filter):
        return (
            select(UserReference)
            .outerjoin(StudentProfile, StudentProfile.user_id == UserReference.id)
            .where(expr.compile(STUDENT_FIELDS))
        )

    async def find_students(self, expr: Filter) -> List[UserReference]:
        stmt = self._students_stmt(expr).options(*STUDENT_LOAD_OPTIONS).order_by(UserReference.id)
        result = await self.db.execute(stmt)
        return list(result.scalars().unique().all())

    async def count_students(self, expr: Filter) -> int:
        stmt = select(func.count()).select_from(self._students_stmt(expr).subquery())
        return (await self.db.execute(stmt)).scalar_one()

    @staticmethod
    def _dump(students, cycle_number: Optional[int] = None) -> List[dict]:
        data = []
        for student in students:
            item = StudentOut.model_validate(student).model_dump(mode="json")
            profile = item["student_profile"]
            if cycle_number is not None and profile:
                profile["student_subjects"] = [
                    e for e in profile["student_subjects"]
                    if e["subject"] and e["subject"]["cicle_number"] == cycle_number
                ]
            data.append(item)
        return data

    async def find_students_with_logical_filters(
        self, career_id: int, cycle_number: int, status: str = "active"
    ) -> dict:
        """Students with ``status`` AND in ``career_id`` AND enrolled in a subject of ``cycle_number``"""
        base = AllOf(
            FieldEquals("role", RoleId.STUDENT),
            FieldEquals("status", status),
            FieldEquals("career_id", career_id),
        )
        try:
            total_matching = await self.count_students(base)
            students = await self.find_students(AllOf(base, HasEnrollment(cycle_number)))
        except Exception:
            logger.exception("Logical filter query failed")
            raise InternalError("Error filtering students with logical operators")

        return {
            "message": "Students filtered with logical operators (AND)",
            "filters": {"career_id": career_id, "cycle_number": cycle_number, "status": status},
            "data": self._dump(students, cycle_number),
            "total": len(students),
            "summary": {
                "total_matching": total_matching,
                "with_enrollments_in_cycle": len(students),
            },
        }

    async def find_students_by_multiple_cycles(self, cycles: List[int], career_id: Optional[int] = None) -> dict:
        """Students whose current cycle is any of ``cycles`` (OR)"""
        expr = AllOf(FieldEquals("role", RoleId.STUDENT), field_in("current_cycle", cycles))
        if career_id:
            expr = AllOf(expr, FieldEquals("career_id", career_id))
        try:
            students = await self.find_students(expr)
        except Exception:
            logger.exception("Multiple cycles query failed")
            raise InternalError("Error searching students by multiple cycles")

        return {
            "message": "Students in multiple cycles (OR)",
            "filters": {"cycles": cycles, "career_id": career_id or "all"},
            "data": self._dump(students),
            "total": len(students),
        }

    async def find_students_excluding_statuses(
        self, excluded_statuses: List[str], career_id: Optional[int] = None
    ) -> dict:
        """Students whose status is none of ``excluded_statuses`` (NOT)"""
        expr = AllOf(FieldEquals("role", RoleId.STUDENT), Not(field_in("status", excluded_statuses)))
        if career_id:
            expr = AllOf(expr, FieldEquals("career_id", career_id))
        try:
            students = await self.find_students(expr)
        except Exception:
            logger.exception("Excluded statuses query failed")
            raise InternalError("Error filtering students with NOT")

        return {
            "message": "Students excluding statuses (NOT)",
            "filters": {"excluded_statuses": excluded_statuses, "career_id": career_id or "all"},
            "data": self._dump(students),
            "total": len(students),
        }

    async def find_students_with_complex_logic(
        self, career_ids: List[int], exclude_cycles: List[int], status: str = "active"
    ) -> dict:
        """Students with ``status`` AND (any of ``career_ids``) AND NOT (any of ``exclude_cycles``), having enrollments"""
        base = AllOf(
            FieldEquals("role", RoleId.STUDENT),
            FieldEquals("status", status),
            field_in("career_id", career_ids),
            Not(field_in("current_cycle", exclude_cycles)),
        )
        try:
            total_matching = await self.count_students(base)
            students = await self.find_students(AllOf(base, HasEnrollment()))
        except Exception:
            logger.exception("Complex logic query failed")
            raise InternalError("Error running complex query")

        return {
            "message": "Students with complex logic (AND + OR + NOT)",
            "filters": {"status": status, "career_ids": career_ids, "exclude_cycles": exclude_cycles},
            "data": self._dump(students),
            "total": len(students),
            "summary": {
                "total_matching": total_matching,
                "with_enrollments": len(students),
            },
        }
