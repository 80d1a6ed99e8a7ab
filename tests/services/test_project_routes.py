"""Project routes — HTTP surface of the Project Store and add/remove employee."""

from uuid import uuid4


async def _create(client, body):
    res = await client.post("/api/v1/projects", json=body)
    assert res.status_code == 201, res.text
    return res.json()


async def _employee(client, body):
    res = await client.post("/api/v1/employees", json=body)
    assert res.status_code == 201, res.text
    return res.json()


async def test_create_website_revamp(client, project_body):
    data = await _create(client, project_body())
    assert data["project_code"] == "PROJ0001"
    assert data["status"] == "Planning"
    assert data["duration_days"] == 152
    assert data["total_allocated_hours"] == 0
    assert data["assignments"] == []


async def test_create_end_before_start_is_400_on_end_date(client, project_body):
    res = await client.post(
        "/api/v1/projects", json=project_body(end_date="2023-12-01"),
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"] == [
        {"field": "end_date", "message": "end_date must be later than start_date"},
    ]


async def test_patch_merged_date_order(client, project_body):
    project = await _create(client, project_body())
    res = await client.patch(
        f"/api/v1/projects/{project['id']}", json={"end_date": "2023-06-01"},
    )
    assert res.status_code == 400
    res = await client.patch(
        f"/api/v1/projects/{project['id']}", json={"end_date": "2024-12-01"},
    )
    assert res.status_code == 200
    assert res.json()["end_date"] == "2024-12-01"


async def test_progress_and_active(client, project_body):
    project = await _create(client, project_body())
    await _create(client, project_body(name="Idle"))

    res = await client.patch(
        f"/api/v1/projects/{project['id']}/progress",
        json={"completion_percentage": 25},
    )
    assert res.status_code == 200
    assert res.json()["status"] == "InProgress"

    res = await client.get("/api/v1/projects/active")
    assert [p["id"] for p in res.json()] == [project["id"]]

    res = await client.patch(
        f"/api/v1/projects/{project['id']}/progress",
        json={"completion_percentage": 150},
    )
    assert res.status_code == 400


async def test_get_unknown_and_malformed(client):
    assert (await client.get(f"/api/v1/projects/{uuid4()}")).status_code == 404
    res = await client.get("/api/v1/projects/123")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_IDENTIFIER"


async def test_delete(client, project_body):
    project = await _create(client, project_body())
    res = await client.delete(f"/api/v1/projects/{project['id']}")
    assert res.status_code == 200
    assert (await client.get(f"/api/v1/projects/{project['id']}")).status_code == 404


async def test_add_employee_requires_role_for_new_entry(
    client, project_body, employee_body,
):
    project = await _create(client, project_body())
    employee = await _employee(client, employee_body())
    res = await client.post(
        f"/api/v1/projects/{project['id']}/add-employee",
        json={"employee_id": employee["id"], "allocated_hours": 20},
    )
    assert res.status_code == 400
    assert res.json()["error"]["details"][0]["field"] == "role"


async def test_add_employee_twice_one_entry(client, project_body, employee_body):
    project = await _create(client, project_body())
    employee = await _employee(client, employee_body())
    body = {"employee_id": employee["id"], "role": "Designer", "allocated_hours": 20}

    for _ in range(2):
        res = await client.post(
            f"/api/v1/projects/{project['id']}/add-employee", json=body,
        )
        assert res.status_code == 200

    data = res.json()["project"]
    assert len(data["assignments"]) == 1
    assert data["assignments"][0]["role"] == "Designer"
    assert data["total_allocated_hours"] == 20

    res = await client.get(f"/api/v1/employees/{employee['id']}")
    assert res.json()["current_project_id"] == project["id"]


async def test_add_unknown_employee_is_404(client, project_body):
    project = await _create(client, project_body())
    res = await client.post(
        f"/api/v1/projects/{project['id']}/add-employee",
        json={"employee_id": str(uuid4()), "role": "Tester", "allocated_hours": 5},
    )
    assert res.status_code == 404


async def test_remove_employee_assigned_elsewhere_is_cleared(
    client, project_body, employee_body,
):
    employee = await _employee(client, employee_body())
    p1 = await _create(client, project_body())
    p2 = await _create(client, project_body(name="Mobile"))
    await client.post(
        f"/api/v1/employees/{employee['id']}/assign-project",
        json={"project_id": p2["id"]},
    )

    res = await client.post(
        f"/api/v1/projects/{p1['id']}/remove-employee",
        json={"employee_id": employee["id"]},
    )
    assert res.status_code == 200

    res = await client.get(f"/api/v1/employees/{employee['id']}")
    assert res.json()["current_project_id"] is None
    assert res.json()["project_assigned_at"] is None
