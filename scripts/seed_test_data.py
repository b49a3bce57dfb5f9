#!/usr/bin/env python3
"""Load the demo careers, subjects, teachers, students and enrollments.

    python scripts/seed_test_data.py

Uses USERS_DATABASE_URL, PROFILES_DATABASE_URL and ACADEMIC_DATABASE_URL.
Safe to run more than once.
"""
import asyncio
import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from academic_records.core.database import (
    UsersSessionLocal, ProfilesSessionLocal, AcademicSessionLocal, close_db_connections,
)
from academic_records.core.logging import setup_logging
from academic_records.seed import (
    seed_all, TEACHERS, STUDENTS, TEACHER_PASSWORD, STUDENT_PASSWORD,
)

async def main():
    setup_logging()
    try:
        async with UsersSessionLocal() as users_db, \
                AcademicSessionLocal() as academic_db, \
                ProfilesSessionLocal() as profiles_db:
            await seed_all(users_db, academic_db, profiles_db)
    finally:
        await close_db_connections()

    print("✅ Seed completed\n")
    print("Test credentials:")
    for teacher in TEACHERS:
        print(f"  teacher  {teacher['email']} / {TEACHER_PASSWORD}")
    for student in STUDENTS:
        print(f"  student  {student['email']} / {STUDENT_PASSWORD}")

if __name__ == "__main__":
    asyncio.run(main())
