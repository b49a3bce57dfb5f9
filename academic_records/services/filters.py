# academic_records/services/filters.py
"""Composable boolean filters over students and teachers.

A filter is a small tree of ``FieldEquals`` / ``HasEnrollment`` /
``HasAssignment`` leaves joined by ``AllOf``, ``AnyOf`` and ``Not``. The tree
is compiled into a SQLAlchemy clause against a field map naming the columns a
leaf may refer to:

    expr = AllOf(
        FieldEquals("role", RoleId.STUDENT),
        AnyOf(FieldEquals("career_id", 1), FieldEquals("career_id", 2)),
        Not(FieldEquals("current_cycle", 1)),
    )
    stmt = select(UserReference).outerjoin(StudentProfile).where(expr.compile(STUDENT_FIELDS))

``AllOf()`` with no children is always true and ``AnyOf()`` is always false,
so an empty list of alternatives matches nothing.
"""
from dataclasses import dataclass
import enum
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import and_, or_, not_, true, false, select

from ..models.profiles import (
    UserReference, StudentProfile, TeacherProfile, StudentSubject, SubjectReference, SubjectAssignment,
)

STUDENT_FIELDS = {
    "role": UserReference.role_id,
    "status": UserReference.status,
    "career_id": StudentProfile.career_id,
    "current_cycle": StudentProfile.current_cicle,
}

TEACHER_FIELDS = {
    "role": UserReference.role_id,
    "status": UserReference.status,
    "career_id": TeacherProfile.career_id,
    "speciality_id": TeacherProfile.speciality_id,
}


class Filter:
    def compile(self, fields: Dict[str, Any]):
        raise NotImplementedError

    def __and__(self, other: "Filter") -> "AllOf":
        return AllOf(self, other)

    def __or__(self, other: "Filter") -> "AnyOf":
        return AnyOf(self, other)

    def __invert__(self) -> "Not":
        return Not(self)


@dataclass(frozen=True)
class FieldEquals(Filter):
    field: str
    value: Any

    def compile(self, fields):
        try:
            column = fields[self.field]
        except KeyError:
            raise ValueError(f"Unknown filter field: {self.field}")
        value = self.value.value if isinstance(self.value, enum.Enum) else self.value
        return column == value


class AllOf(Filter):
    def __init__(self, *children: Filter):
        self.children: Tuple[Filter, ...] = children

    def compile(self, fields):
        if not self.children:
            return true()
        return and_(*(child.compile(fields) for child in self.children))

    def __repr__(self):
        return f"AllOf{self.children!r}"


class AnyOf(Filter):
    def __init__(self, *children: Filter):
        self.children: Tuple[Filter, ...] = children

    def compile(self, fields):
        if not self.children:
            return false()
        return or_(*(child.compile(fields) for child in self.children))

    def __repr__(self):
        return f"AnyOf{self.children!r}"


@dataclass(frozen=True)
class Not(Filter):
    child: Filter

    def compile(self, fields):
        return not_(self.child.compile(fields))


@dataclass(frozen=True)
class HasEnrollment(Filter):
    """Student has at least one enrollment, optionally in a subject of ``cycle_number``."""
    cycle_number: Optional[int] = None

    def compile(self, fields):
        stmt = select(StudentSubject.id).where(StudentSubject.student_profile_id == StudentProfile.id)
        if self.cycle_number is not None:
            stmt = stmt.join(SubjectReference, SubjectReference.id == StudentSubject.subject_id).where(
                SubjectReference.cicle_number == self.cycle_number
            )
        return stmt.exists()


@dataclass(frozen=True)
class HasAssignment(Filter):
    """Teacher is assigned to at least one subject."""

    def compile(self, fields):
        return (
            select(SubjectAssignment.id)
            .where(SubjectAssignment.teacher_profile_id == TeacherProfile.id)
            .exists()
        )


def field_in(field: str, values) -> AnyOf:
    """Shorthand for ``field == v1 OR field == v2 ...``"""
    return AnyOf(*(FieldEquals(field, value) for value in values))
