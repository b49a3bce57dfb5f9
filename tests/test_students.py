# tests/test_students.py
import pytest

from academic_records.models.users import User

pytestmark = pytest.mark.anyio

async def test_list_students(client, seeded):
    body = (await client.get("/student/")).json()

    assert body["total"] == 4
    assert [s["id"] for s in body["items"]] == [200, 201, 202, 203]
    assert body["items"][0]["student_profile"]["career"]["name"] == "Software Engineering"

    page = (await client.get("/student/", params={"page": 2, "size": 3})).json()
    assert [s["id"] for s in page["items"]] == [203]
    assert page["has_previous"] is True
    assert page["has_next"] is False

async def test_list_active_students(client, seeded):
    body = (await client.get("/student/active")).json()
    assert [s["id"] for s in body["items"]] == [200, 201, 202]

async def test_get_student(client, seeded):
    body = (await client.get("/student/202")).json()
    assert body["name"] == "Pedro Sanchez"
    assert body["student_profile"]["current_cicle"] == 2
    assert sorted(e["subject_id"] for e in body["student_profile"]["student_subjects"]) == [4, 5]

    assert (await client.get("/student/100")).status_code == 404
    assert (await client.get("/student/9999")).status_code == 404

async def test_student_enrollments_by_cycle(client, seeded):
    body = (await client.get("/student/200/enrollments")).json()
    assert len(body["student"]["enrollments"]) == 3
    assert body["student"]["career"]["name"] == "Software Engineering"

    body = (await client.get("/student/202/enrollments", params={"cycleNumber": 1})).json()
    assert body["student"]["enrollments"] == []

    body = (await client.get("/student/202/enrollments", params={"cycleNumber": 2})).json()
    assert len(body["student"]["enrollments"]) == 2

async def test_update_student(client, seeded):
    response = await client.patch("/student/201", json={"name": "Maria G. Garcia", "current_cicle": 2})

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Maria G. Garcia"
    assert body["student_profile"]["current_cicle"] == 2
    assert len(body["student_profile"]["student_subjects"]) == 2

async def test_update_student_duplicate_email(client, seeded):
    response = await client.patch("/student/201", json={"email": "juan.perez@example.edu"})
    assert response.status_code == 409

async def test_update_student_rejects_unknown_status(client, seeded):
    response = await client.patch("/student/201", json={"status": "graduated"})
    assert response.status_code == 422

async def test_update_student_unknown_career_is_not_found(client, seeded):
    response = await client.patch("/student/201", json={"name": "Renamed", "career_id": 99})

    assert response.status_code == 404
    assert "Career with ID 99" in response.json()["detail"]["message"]
    student = (await client.get("/student/201")).json()
    assert student["name"] == "Maria Garcia"
    assert student["student_profile"]["career_id"] == 1

async def test_delete_student_keeps_user_account(client, seeded, session_factories):
    response = await client.delete("/student/202")

    assert response.status_code == 200
    assert (await client.get("/student/202")).status_code == 404
    report = (await client.get("/reports/system-statistics")).json()["data"]
    assert report["total_students"] == 3
    assert report["total_enrollments"] == 5

    async with session_factories["users"]() as session:
        assert await session.get(User, 202) is not None
