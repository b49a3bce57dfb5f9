# tests/test_enrollment.py
import pytest
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from academic_records.models.profiles import StudentSubject, StudentProfile, UserReference
from academic_records.services.enrollment_service import EnrollmentService, MAX_STUDENTS_PER_SUBJECT
from academic_records.core.exceptions import NotFoundError, InvalidStateError, ConflictError

from conftest import add_students, count_enrollments

pytestmark = pytest.mark.anyio

async def clear_enrollments(factory):
    async with factory() as session:
        await session.execute(delete(StudentSubject))
        await session.commit()

async def test_enroll_first_student_reports_29_seats(client, seeded, session_factories):
    await clear_enrollments(session_factories["profiles"])

    response = await client.post("/enrollment", json={"studentId": 200, "subjectId": 1})

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["slotsRemaining"] == 29
    assert data["status"] == "enrolled"
    assert data["student"] == {
        "id": 200,
        "name": "Juan Perez",
        "email": "juan.perez@example.edu",
        "career": "Software Engineering",
    }
    assert data["subject"] == {"id": 1, "name": "Programming I", "cycle": 1}
    assert data["enrollmentId"] > 0
    assert data["enrollmentDate"]

async def test_successful_enrollment_writes_one_ungraded_row(client, seeded, session_factories):
    response = await client.post("/enrollment", json={"studentId": 200, "subjectId": 6})
    assert response.status_code == 201

    async with session_factories["profiles"]() as session:
        rows = (await session.execute(
            select(StudentSubject)
            .join(StudentProfile, StudentProfile.id == StudentSubject.student_profile_id)
            .where(StudentProfile.user_id == 200, StudentSubject.subject_id == 6)
        )).scalars().all()
    assert len(rows) == 1
    assert rows[0].status == "enrolled"
    assert rows[0].grade is None

async def test_slots_remaining_counts_existing_enrollments(client, seeded):
    # Subject 1 already has Juan and Maria
    response = await client.post("/enrollment", json={"studentId": 202, "subjectId": 1})
    assert response.status_code == 201
    assert response.json()["data"]["slotsRemaining"] == MAX_STUDENTS_PER_SUBJECT - 2 - 1

async def test_duplicate_enrollment_is_conflict(client, seeded, session_factories):
    first = await client.post("/enrollment", json={"studentId": 202, "subjectId": 6})
    assert first.status_code == 201

    second = await client.post("/enrollment", json={"studentId": 202, "subjectId": 6})
    assert second.status_code == 409
    assert second.json()["detail"]["error"] == "Conflict"
    assert await count_enrollments(session_factories["profiles"], student_id=202, subject_id=6) == 1

async def test_inactive_student_cannot_enroll(client, seeded, session_factories):
    response = await client.post("/enrollment", json={"studentId": 203, "subjectId": 1})

    assert response.status_code == 400
    assert "not active" in response.json()["detail"]["message"]
    assert await count_enrollments(session_factories["profiles"], student_id=203) == 0

async def test_subject_from_other_career_is_rejected(client, seeded, session_factories):
    await add_students(session_factories["profiles"], 1, first_id=500, career_id=2)

    response = await client.post("/enrollment", json={"studentId": 500, "subjectId": 1})

    assert response.status_code == 400
    assert "career" in response.json()["detail"]["message"]
    assert await count_enrollments(session_factories["profiles"], student_id=500) == 0

async def test_unknown_student_and_subject_are_not_found(client, seeded):
    missing_student = await client.post("/enrollment", json={"studentId": 9999, "subjectId": 1})
    assert missing_student.status_code == 404
    assert "9999" in missing_student.json()["detail"]["message"]

    missing_subject = await client.post("/enrollment", json={"studentId": 200, "subjectId": 9999})
    assert missing_subject.status_code == 404

    # A teacher id is not a student id
    teacher = await client.post("/enrollment", json={"studentId": 100, "subjectId": 1})
    assert teacher.status_code == 404

async def test_student_without_profile_cannot_enroll(client, seeded, session_factories):
    async with session_factories["profiles"]() as session:
        session.add(UserReference(id=600, name="No Profile", email="np@example.edu", role_id=3, status="active"))
        await session.commit()

    response = await client.post("/enrollment", json={"studentId": 600, "subjectId": 1})
    assert response.status_code == 400
    assert "profile" in response.json()["detail"]["message"]

async def test_thirtieth_seat_succeeds_and_thirty_first_fails(client, seeded, session_factories):
    profiles = session_factories["profiles"]
    await add_students(profiles, MAX_STUDENTS_PER_SUBJECT - 1, subject_id=7)

    thirtieth = await client.post("/enrollment", json={"studentId": 200, "subjectId": 7})
    assert thirtieth.status_code == 201
    assert thirtieth.json()["data"]["slotsRemaining"] == 0

    thirty_first = await client.post("/enrollment", json={"studentId": 201, "subjectId": 7})
    assert thirty_first.status_code == 400
    assert "No seats available" in thirty_first.json()["detail"]["message"]
    assert await count_enrollments(profiles, subject_id=7) == MAX_STUDENTS_PER_SUBJECT

async def test_invalid_enrollment_payload_is_rejected(client, seeded):
    response = await client.post("/enrollment", json={"studentId": 0, "subjectId": 1})
    assert response.status_code == 422

async def test_bulk_enrollment_partial_success(client, seeded, session_factories):
    # Pedro: subject 6 is new, subject 4 is already taken, 9999 does not exist
    response = await client.post("/enrollment/bulk", json={"studentId": 202, "subjectIds": [6, 4, 9999]})

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["totalRequested"] == 3
    assert data["successfulEnrollments"] == 1
    assert data["failedEnrollments"] == 2
    assert [e["subject"] for e in data["enrollments"]] == ["Databases"]
    assert len(data["errors"]) == 2
    assert any("9999" in error for error in data["errors"])
    assert await count_enrollments(session_factories["profiles"], student_id=202) == 3

async def test_bulk_enrollment_total_failure_creates_nothing(client, seeded, session_factories):
    before = await count_enrollments(session_factories["profiles"])

    response = await client.post("/enrollment/bulk", json={"studentId": 200, "subjectIds": [1, 2, 3]})

    assert response.status_code == 400
    assert "Could not enroll in any subject" in response.json()["detail"]["message"]
    assert await count_enrollments(session_factories["profiles"]) == before

async def test_bulk_enrollment_validates_student_once(client, seeded):
    response = await client.post("/enrollment/bulk", json={"studentId": 203, "subjectIds": [6, 7]})
    assert response.status_code == 400

    empty = await client.post("/enrollment/bulk", json={"studentId": 200, "subjectIds": []})
    assert empty.status_code == 422

async def test_cancel_ungraded_enrollment(client, seeded, session_factories):
    async with session_factories["profiles"]() as session:
        enrollment = (await session.execute(
            select(StudentSubject)
            .join(StudentProfile, StudentProfile.id == StudentSubject.student_profile_id)
            .where(StudentProfile.user_id == 201, StudentSubject.subject_id == 2)
        )).scalar_one()
    before = await count_enrollments(session_factories["profiles"])

    response = await client.delete(f"/enrollment/{enrollment.id}")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data == {"enrollmentId": enrollment.id, "student": "Maria Garcia", "subject": "Mathematics I"}
    assert await count_enrollments(session_factories["profiles"]) == before - 1
    assert await count_enrollments(session_factories["profiles"], student_id=201, subject_id=2) == 0

async def test_cancel_graded_enrollment_is_rejected(client, seeded, session_factories):
    async with session_factories["profiles"]() as session:
        enrollment = (await session.execute(select(StudentSubject).order_by(StudentSubject.id))).scalars().first()
        await session.execute(update(StudentSubject).where(StudentSubject.id == enrollment.id).values(grade=8.5))
        await session.commit()
    before = await count_enrollments(session_factories["profiles"])

    response = await client.delete(f"/enrollment/{enrollment.id}")

    assert response.status_code == 400
    assert "grade" in response.json()["detail"]["message"]
    assert await count_enrollments(session_factories["profiles"]) == before

async def test_cancel_unknown_enrollment(client, seeded):
    response = await client.delete("/enrollment/424242")
    assert response.status_code == 404

async def test_service_raises_business_errors(seeded, profiles_db):
    service = EnrollmentService(profiles_db)

    with pytest.raises(NotFoundError):
        await service.enroll_student(9999, 1)

    with pytest.raises(ConflictError):
        await service.enroll_student(200, 1)

    with pytest.raises(InvalidStateError):
        await service.enroll_student(203, 1)

    result = await service.enroll_student(201, 3)
    assert result["data"]["slotsRemaining"] == MAX_STUDENTS_PER_SUBJECT - 1 - 1

async def test_unexpected_failure_is_internal_and_rolled_back(client, seeded, session_factories, monkeypatch):
    async def broken_count(self, subject_id):
        raise RuntimeError("connection reset by peer")

    monkeypatch.setattr(EnrollmentService, "_count_enrollments", broken_count)
    before = await count_enrollments(session_factories["profiles"])

    response = await client.post("/enrollment", json={"studentId": 202, "subjectId": 6})

    assert response.status_code == 500
    assert response.json()["detail"] == {
        "error": "Internal Error",
        "message": "Enrollment failed. The transaction was rolled back.",
    }
    assert "connection reset" not in response.text
    assert await count_enrollments(session_factories["profiles"]) == before

async def test_bulk_unexpected_failure_is_internal_and_rolled_back(client, seeded, session_factories, monkeypatch):
    async def broken_find(self, student_profile_id, subject_id):
        raise RuntimeError("connection reset by peer")

    monkeypatch.setattr(EnrollmentService, "_find_enrollment", broken_find)
    before = await count_enrollments(session_factories["profiles"])

    response = await client.post("/enrollment/bulk", json={"studentId": 202, "subjectIds": [6, 7]})

    assert response.status_code == 500
    assert response.json()["detail"]["message"] == "Bulk enrollment failed. The transaction was rolled back."
    assert "connection reset" not in response.text
    assert await count_enrollments(session_factories["profiles"]) == before

async def test_store_duplicate_is_conflict(client, seeded, session_factories, monkeypatch):
    async def miss_existing(self, student_profile_id, subject_id):
        return None

    # Juan already holds subject 1; only the unique constraint can catch it now
    monkeypatch.setattr(EnrollmentService, "_find_enrollment", miss_existing)

    response = await client.post("/enrollment", json={"studentId": 200, "subjectId": 1})

    assert response.status_code == 409
    assert response.json()["detail"]["error"] == "Conflict"
    assert await count_enrollments(session_factories["profiles"], student_id=200, subject_id=1) == 1

async def test_bulk_store_duplicate_fails_only_that_item(client, seeded, session_factories, monkeypatch):
    async def miss_existing(self, student_profile_id, subject_id):
        return None

    monkeypatch.setattr(EnrollmentService, "_find_enrollment", miss_existing)

    # Pedro already holds subject 4
    response = await client.post("/enrollment/bulk", json={"studentId": 202, "subjectIds": [6, 4]})

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["successfulEnrollments"] == 1
    assert data["errors"] == ["Error on subject ID 4: already enrolled"]
    assert await count_enrollments(session_factories["profiles"], student_id=202, subject_id=4) == 1
    assert await count_enrollments(session_factories["profiles"], student_id=202, subject_id=6) == 1

async def test_bulk_repeated_subject_is_enrolled_once(client, seeded, session_factories, monkeypatch):
    async def miss_existing(self, student_profile_id, subject_id):
        return None

    monkeypatch.setattr(EnrollmentService, "_find_enrollment", miss_existing)

    response = await client.post("/enrollment/bulk", json={"studentId": 202, "subjectIds": [6, 6]})

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["successfulEnrollments"] == 1
    assert data["failedEnrollments"] == 1
    assert await count_enrollments(session_factories["profiles"], student_id=202, subject_id=6) == 1

async def test_cancel_unexpected_failure_is_internal(client, seeded, session_factories, monkeypatch):
    async with session_factories["profiles"]() as session:
        enrollment_id = (await session.execute(select(StudentSubject.id).order_by(StudentSubject.id))).scalars().first()
    before = await count_enrollments(session_factories["profiles"])

    async def broken_delete(self, instance):
        raise RuntimeError("disk I/O error")

    monkeypatch.setattr(AsyncSession, "delete", broken_delete)

    response = await client.delete(f"/enrollment/{enrollment_id}")

    assert response.status_code == 500
    assert response.json()["detail"]["message"] == "Error cancelling enrollment"
    assert "disk I/O" not in response.text
    assert await count_enrollments(session_factories["profiles"]) == before
