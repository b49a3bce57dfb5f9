# tests/test_teachers.py
import pytest

pytestmark = pytest.mark.anyio

async def test_list_and_get_teachers(client, seeded):
    body = (await client.get("/teacher/")).json()
    assert [t["id"] for t in body["items"]] == [100, 101]

    teacher = (await client.get("/teacher/100")).json()
    assert teacher["teacher_profile"]["speciality"]["name"] == "Technology"
    assert sorted(a["subject_id"] for a in teacher["teacher_profile"]["subjects"]) == [1, 4, 6]

    assert (await client.get("/teacher/200")).status_code == 404

async def test_teachers_with_multiple_subjects(client, seeded):
    body = (await client.get("/teacher/multiple-subjects")).json()
    assert body["total"] == 2
    assert body["has_next"] is False
    assert [(t["id"], t["subjects_count"]) for t in body["items"]] == [(100, 3), (101, 2)]

async def test_teachers_with_logical_operators(client, seeded):
    body = (await client.get("/teacher/logical-filters")).json()
    assert body["total"] == 2

    body = (await client.get("/teacher/logical-filters", params={"hasSubjects": True, "careerId": 2})).json()
    assert body["total"] == 0

    await client.patch("/teacher/101", json={"career_id": 2})
    body = (await client.get("/teacher/logical-filters", params={"careerId": 2, "isFullTime": True})).json()
    assert [t["id"] for t in body["data"]] == [101]
    assert body["filters"]["is_full_time"] is True

async def test_assign_subject(client, seeded):
    response = await client.post("/teacher/101/subjects", json={"subject_id": 7})
    assert response.status_code == 201
    assert response.json()["subject_id"] == 7

    duplicate = await client.post("/teacher/101/subjects", json={"subject_id": 7})
    assert duplicate.status_code == 409

    assert (await client.post("/teacher/101/subjects", json={"subject_id": 9999})).status_code == 404
    assert (await client.post("/teacher/200/subjects", json={"subject_id": 7})).status_code == 404

    workload = (await client.get("/reports/teacher-workload")).json()["data"]
    assert {r["teacher_id"]: r["total_subjects_assigned"] for r in workload} == {100: 3, 101: 3}

async def test_update_teacher(client, seeded):
    response = await client.patch("/teacher/100", json={"name": "Dr. Carlos A. Mendez"})
    assert response.status_code == 200
    assert response.json()["name"] == "Dr. Carlos A. Mendez"

    conflict = await client.patch("/teacher/100", json={"email": "maria.lopez@example.edu"})
    assert conflict.status_code == 409

async def test_update_teacher_unknown_references_are_not_found(client, seeded):
    speciality = await client.patch("/teacher/100", json={"speciality_id": 99})
    assert speciality.status_code == 404
    assert "Speciality with ID 99" in speciality.json()["detail"]["message"]

    career = await client.patch("/teacher/100", json={"career_id": 99})
    assert career.status_code == 404
    assert "Career with ID 99" in career.json()["detail"]["message"]

async def test_delete_teacher(client, seeded):
    assert (await client.delete("/teacher/101")).status_code == 200
    assert (await client.get("/teacher/101")).status_code == 404
    body = (await client.get("/teacher/")).json()
    assert body["total"] == 1
