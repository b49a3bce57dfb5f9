# tests/test_queries.py
import pytest

pytestmark = pytest.mark.anyio

def student_ids(body):
    return [s["id"] for s in body["data"]]

async def test_logical_filters_and(client, seeded):
    response = await client.get(
        "/queries/students/logical-filters", params={"careerId": 1, "cycleNumber": 1}
    )

    assert response.status_code == 200
    body = response.json()
    assert student_ids(body) == [200, 201]
    assert body["summary"] == {"total_matching": 3, "with_enrollments_in_cycle": 2}
    assert body["filters"]["status"] == "active"
    juan = body["data"][0]
    # Only enrollments in subjects of cycle 1 are listed
    assert len(juan["student_profile"]["student_subjects"]) == 3
    assert all(e["subject"]["cicle_number"] == 1 for e in juan["student_profile"]["student_subjects"])

async def test_logical_filters_with_other_status(client, seeded):
    response = await client.get(
        "/queries/students/logical-filters",
        params={"careerId": 1, "cycleNumber": 1, "status": "suspended"},
    )
    body = response.json()
    assert body["total"] == 0
    assert body["summary"]["total_matching"] == 1

async def test_logical_filters_requires_parameters(client, seeded):
    response = await client.get("/queries/students/logical-filters", params={"careerId": 1})
    assert response.status_code == 422

async def test_multiple_cycles_or(client, seeded):
    response = await client.get("/queries/students/multiple-cycles", params={"cycles": "1,2"})
    body = response.json()
    assert student_ids(body) == [200, 201, 202, 203]
    assert body["filters"] == {"cycles": [1, 2], "career_id": "all"}

    response = await client.get("/queries/students/multiple-cycles", params={"cycles": "2", "careerId": 1})
    assert student_ids(response.json()) == [202]

    response = await client.get("/queries/students/multiple-cycles", params={"cycles": "1", "careerId": 2})
    assert response.json()["total"] == 0

async def test_multiple_cycles_ignores_invalid_entries(client, seeded):
    response = await client.get("/queries/students/multiple-cycles", params={"cycles": "2,abc"})
    assert student_ids(response.json()) == [202]

async def test_multiple_cycles_rejects_invalid_list(client, seeded):
    response = await client.get("/queries/students/multiple-cycles", params={"cycles": "abc,"})
    assert response.status_code == 400

    response = await client.get("/queries/students/multiple-cycles")
    assert response.status_code == 422

async def test_exclude_statuses_not(client, seeded):
    response = await client.get(
        "/queries/students/exclude-statuses", params={"excludedStatuses": "suspended"}
    )
    body = response.json()
    assert student_ids(body) == [200, 201, 202]
    assert body["filters"]["excluded_statuses"] == ["suspended"]

    response = await client.get(
        "/queries/students/exclude-statuses", params={"excludedStatuses": "active,suspended"}
    )
    assert response.json()["total"] == 0

async def test_exclude_statuses_rejects_empty_list(client, seeded):
    response = await client.get("/queries/students/exclude-statuses", params={"excludedStatuses": ","})
    assert response.status_code == 400

async def test_complex_logic(client, seeded):
    response = await client.get(
        "/queries/students/complex-logic", params={"careerIds": "1,2", "excludeCycles": "2"}
    )
    body = response.json()
    assert student_ids(body) == [200, 201]
    assert body["summary"] == {"total_matching": 2, "with_enrollments": 2}
    assert body["filters"] == {"status": "active", "career_ids": [1, 2], "exclude_cycles": [2]}

    response = await client.get(
        "/queries/students/complex-logic", params={"careerIds": "1", "excludeCycles": "1"}
    )
    assert student_ids(response.json()) == [202]

async def test_complex_logic_rejects_invalid_lists(client, seeded):
    response = await client.get(
        "/queries/students/complex-logic", params={"careerIds": "x", "excludeCycles": "1"}
    )
    assert response.status_code == 400
