# tests/test_filters.py
import pytest

from academic_records.models.enums import RoleId, UserStatus
from academic_records.services.filters import (
    AllOf, AnyOf, Not, FieldEquals, HasEnrollment, STUDENT_FIELDS, field_in,
)
from academic_records.services.query_service import QueryService

pytestmark = pytest.mark.anyio

STUDENT = FieldEquals("role", RoleId.STUDENT)

async def ids(service, expr):
    return [s.id for s in await service.find_students(expr)]

def test_operators_build_expression_tree():
    expr = STUDENT & (FieldEquals("career_id", 1) | FieldEquals("career_id", 2))
    assert isinstance(expr, AllOf)
    assert isinstance(expr.children[1], AnyOf)
    assert isinstance(~STUDENT, Not)
    assert field_in("current_cycle", [1, 2]).children == (
        FieldEquals("current_cycle", 1),
        FieldEquals("current_cycle", 2),
    )

def test_unknown_field_is_rejected():
    with pytest.raises(ValueError):
        FieldEquals("grade", 10).compile(STUDENT_FIELDS)

def test_enum_values_are_unwrapped():
    clause = FieldEquals("status", UserStatus.ACTIVE).compile(STUDENT_FIELDS)
    assert clause.right.value == "active"

async def test_empty_all_of_matches_everything(seeded, profiles_db):
    service = QueryService(profiles_db)
    assert len(await ids(service, AllOf())) == 6  # 4 students + 2 teachers

async def test_empty_any_of_matches_nothing(seeded, profiles_db):
    service = QueryService(profiles_db)
    assert await ids(service, AllOf(STUDENT, AnyOf())) == []
    assert await ids(service, AllOf(STUDENT, field_in("current_cycle", []))) == []

async def test_and_or_not_combination(seeded, profiles_db):
    service = QueryService(profiles_db)
    expr = AllOf(
        STUDENT,
        Not(FieldEquals("status", UserStatus.SUSPENDED)),
        AnyOf(FieldEquals("current_cycle", 2), FieldEquals("current_cycle", 3)),
    )
    assert await ids(service, expr) == [202]

async def test_has_enrollment_in_cycle(seeded, profiles_db):
    service = QueryService(profiles_db)
    assert await ids(service, AllOf(STUDENT, HasEnrollment(1))) == [200, 201]
    assert await ids(service, AllOf(STUDENT, HasEnrollment(2))) == [202]
    assert await ids(service, AllOf(STUDENT, HasEnrollment())) == [200, 201, 202]
    assert await ids(service, AllOf(STUDENT, Not(HasEnrollment()))) == [203]

async def test_count_matches_find(seeded, profiles_db):
    service = QueryService(profiles_db)
    expr = AllOf(STUDENT, FieldEquals("status", "active"))
    assert await service.count_students(expr) == 3
