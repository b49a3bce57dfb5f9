# tests/conftest.py
"""Shared fixtures: one in-memory SQLite database per logical store.

Each test gets fresh users/profiles/academic engines, the API wired to them
through dependency overrides, and (on request) the demo seed data.
"""
import os

# Settings are read at import time; point them at throwaway databases first.
os.environ["USERS_DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["PROFILES_DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ACADEMIC_DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ENVIRONMENT"] = "test"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from academic_records.core.database import (
    make_session_factory, get_users_db, get_profiles_db, get_academic_db,
)
from academic_records.main import app
from academic_records.models import UsersBase, ProfilesBase, AcademicBase
from academic_records.models.profiles import (
    UserReference, StudentProfile, StudentSubject,
)
from academic_records.seed import seed_all

BASES = {
    "users": UsersBase,
    "profiles": ProfilesBase,
    "academic": AcademicBase,
}

@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"

def make_test_engine():
    return create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

@pytest.fixture
async def engines():
    created = {name: make_test_engine() for name in BASES}
    for name, base in BASES.items():
        async with created[name].begin() as conn:
            await conn.run_sync(base.metadata.create_all)
    yield created
    for engine in created.values():
        await engine.dispose()

@pytest.fixture
def session_factories(engines):
    return {name: make_session_factory(engine) for name, engine in engines.items()}

@pytest.fixture
async def seeded(session_factories):
    async with session_factories["users"]() as users_db, \
            session_factories["academic"]() as academic_db, \
            session_factories["profiles"]() as profiles_db:
        await seed_all(users_db, academic_db, profiles_db, hash_rounds=4)

@pytest.fixture
async def users_db(session_factories):
    async with session_factories["users"]() as session:
        yield session

@pytest.fixture
async def profiles_db(session_factories):
    async with session_factories["profiles"]() as session:
        yield session

@pytest.fixture
async def academic_db(session_factories):
    async with session_factories["academic"]() as session:
        yield session

def _override(factory):
    async def _get_db():
        async with factory() as session:
            yield session
    return _get_db

@pytest.fixture
async def client(session_factories):
    app.dependency_overrides[get_users_db] = _override(session_factories["users"])
    app.dependency_overrides[get_profiles_db] = _override(session_factories["profiles"])
    app.dependency_overrides[get_academic_db] = _override(session_factories["academic"])
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()

# Helpers used across test modules

async def count_enrollments(factory, student_id=None, subject_id=None) -> int:
    """Count student_subject rows in a fresh session"""
    async with factory() as session:
        stmt = select(func.count(StudentSubject.id))
        if student_id is not None:
            stmt = stmt.join(StudentProfile, StudentProfile.id == StudentSubject.student_profile_id).where(
                StudentProfile.user_id == student_id
            )
        if subject_id is not None:
            stmt = stmt.where(StudentSubject.subject_id == subject_id)
        return (await session.execute(stmt)).scalar_one()

async def add_students(factory, count: int, subject_id: int = None, first_id: int = 1000, career_id: int = 1):
    """Insert ``count`` active students directly into profiles, optionally enrolled in ``subject_id``"""
    async with factory() as session:
        for offset in range(count):
            user_id = first_id + offset
            reference = UserReference(
                id=user_id,
                name=f"Student {user_id}",
                email=f"student{user_id}@example.edu",
                role_id=3,
                status="active",
            )
            reference.student_profile = StudentProfile(career_id=career_id, current_cicle=1)
            session.add(reference)
            if subject_id is not None:
                reference.student_profile.student_subjects.append(
                    StudentSubject(subject_id=subject_id, status="enrolled")
                )
        await session.commit()
