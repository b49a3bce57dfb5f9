# academic_records/services/report_service.py
"""Aggregate reports computed with raw SQL against the profiles database."""
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import InternalError
from ..models.enums import RoleId

logger = logging.getLogger(__name__)


def _average(value) -> float:
    return round(float(value or 0), 2)


class ReportService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _fetch(self, sql, params: dict = None):
        result = await self.db.execute(sql, params or {})
        return result.mappings().all()

    async def student_enrollment_report(self) -> dict:
        """Every student with their career and number of enrolled subjects.

        Ordered by subject count descending, then by name.
        """
        try:
            report_sql = text("""
                SELECT
                    ur.id AS student_id,
                    ur.name AS student_name,
                    ur.email AS student_email,
                    cr.id AS career_id,
                    cr.name AS career_name,
                    sp.current_cicle AS current_cycle,
                    CAST(COUNT(ss.id) AS BIGINT) AS total_subjects,
                    ur.status AS enrolled_status
                FROM user_reference ur
                INNER JOIN student_profile sp ON ur.id = sp.user_id
                INNER JOIN career_reference cr ON sp.career_id = cr.id
                LEFT JOIN student_subject ss ON sp.id = ss.student_profile_id
                WHERE ur.role_id = :student_role
                GROUP BY ur.id, ur.name, ur.email, cr.id, cr.name, sp.current_cicle, ur.status
                ORDER BY total_subjects DESC, ur.name ASC
            """)
            rows = await self._fetch(report_sql, {"student_role": int(RoleId.STUDENT)})
        except Exception as e:
            logger.error(f"Student enrollment report failed: {e}")
            raise InternalError("Failed to generate the student enrollment report")

        data = [{**row, "total_subjects": int(row["total_subjects"])} for row in rows]
        with_enrollments = sum(1 for row in data if row["total_subjects"] > 0)

        return {
            "message": "Enrollment report per student",
            "data": data,
            "total": len(data),
            "summary": {
                "total_students": len(data),
                "students_with_enrollments": with_enrollments,
                "students_without_enrollments": len(data) - with_enrollments,
                "max_subjects_enrolled": data[0]["total_subjects"] if data else 0,
            },
        }

    async def students_by_career_report(self) -> dict:
        try:
            report_sql = text("""
                SELECT
                    cr.id AS career_id,
                    cr.name AS career_name,
                    cr.total_cicles AS total_cicles,
                    CAST(COUNT(DISTINCT sp.id) AS BIGINT) AS total_students,
                    CAST(COUNT(ss.id) AS BIGINT) AS total_enrollments,
                    COALESCE(AVG(ss.grade), 0) AS average_grade
                FROM career_reference cr
                LEFT JOIN student_profile sp ON cr.id = sp.career_id
                LEFT JOIN student_subject ss ON sp.id = ss.student_profile_id
                GROUP BY cr.id, cr.name, cr.total_cicles
                ORDER BY total_students DESC, cr.name ASC
            """)
            rows = await self._fetch(report_sql)
        except Exception as e:
            logger.error(f"Students by career report failed: {e}")
            raise InternalError("Failed to generate the students by career report")

        data = [
            {
                "career_id": row["career_id"],
                "career_name": row["career_name"],
                "total_cicles": row["total_cicles"],
                "total_students": int(row["total_students"]),
                "total_enrollments": int(row["total_enrollments"]),
                "average_grade": _average(row["average_grade"]),
            }
            for row in rows
        ]
        return {"message": "Students per career report", "data": data, "total": len(data)}

    async def teacher_workload_report(self) -> dict:
        try:
            report_sql = text("""
                SELECT
                    ur.id AS teacher_id,
                    ur.name AS teacher_name,
                    ur.email AS teacher_email,
                    sr.name AS speciality,
                    cr.name AS career,
                    CAST(COUNT(sa.id) AS BIGINT) AS total_subjects_assigned,
                    CAST(COUNT(DISTINCT subr.id) AS BIGINT) AS unique_subjects
                FROM user_reference ur
                INNER JOIN teacher_profile tp ON ur.id = tp.user_id
                INNER JOIN speciality_reference sr ON tp.speciality_id = sr.id
                INNER JOIN career_reference cr ON tp.career_id = cr.id
                LEFT JOIN subject_assignment sa ON tp.id = sa.teacher_profile_id
                LEFT JOIN subject_reference subr ON sa.subject_id = subr.id
                WHERE ur.role_id = :teacher_role
                GROUP BY ur.id, ur.name, ur.email, sr.name, cr.name
                ORDER BY total_subjects_assigned DESC, ur.name ASC
            """)
            rows = await self._fetch(report_sql, {"teacher_role": int(RoleId.TEACHER)})
        except Exception as e:
            logger.error(f"Teacher workload report failed: {e}")
            raise InternalError("Failed to generate the teacher workload report")

        data = [
            {
                **row,
                "total_subjects_assigned": int(row["total_subjects_assigned"]),
                "unique_subjects": int(row["unique_subjects"]),
            }
            for row in rows
        ]
        with_subjects = sum(1 for row in data if row["total_subjects_assigned"] > 0)

        return {
            "message": "Teacher workload report",
            "data": data,
            "total": len(data),
            "summary": {
                "total_teachers": len(data),
                "teachers_with_subjects": with_subjects,
                "teachers_without_subjects": len(data) - with_subjects,
            },
        }

    async def system_statistics(self) -> dict:
        try:
            stats_sql = text("""
                SELECT
                    (SELECT CAST(COUNT(*) AS BIGINT) FROM user_reference WHERE role_id = :student_role) AS total_students,
                    (SELECT CAST(COUNT(*) AS BIGINT) FROM user_reference WHERE role_id = :teacher_role) AS total_teachers,
                    (SELECT CAST(COUNT(*) AS BIGINT) FROM career_reference) AS total_careers,
                    (SELECT CAST(COUNT(*) AS BIGINT) FROM subject_reference) AS total_subjects,
                    (SELECT CAST(COUNT(*) AS BIGINT) FROM student_subject) AS total_enrollments,
                    (SELECT CAST(COUNT(*) AS BIGINT) FROM student_subject WHERE grade IS NOT NULL) AS graded_enrollments,
                    (SELECT COALESCE(AVG(grade), 0) FROM student_subject WHERE grade IS NOT NULL) AS overall_average
            """)
            rows = await self._fetch(
                stats_sql,
                {"student_role": int(RoleId.STUDENT), "teacher_role": int(RoleId.TEACHER)},
            )
        except Exception as e:
            logger.error(f"System statistics failed: {e}")
            raise InternalError("Failed to generate system statistics")

        stats = rows[0]
        data = {
            key: int(stats[key])
            for key in (
                "total_students",
                "total_teachers",
                "total_careers",
                "total_subjects",
                "total_enrollments",
                "graded_enrollments",
            )
        }
        data["overall_average"] = _average(stats["overall_average"])
        return {"message": "System statistics", "data": data}
