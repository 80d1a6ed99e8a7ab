"""Employee routes — HTTP surface of the Employee Store and assign/release.

Invariants:
    - Field violations are 400 with per-field details
    - Malformed ids are 400 INVALID_IDENTIFIER, unknown ids 404
    - Responses carry derived attributes and the current-project projection
"""

from uuid import uuid4


async def _create(client, body):
    res = await client.post("/api/v1/employees", json=body)
    assert res.status_code == 201, res.text
    return res.json()


async def test_create_returns_generated_code_and_derived_fields(client, employee_body):
    data = await _create(client, employee_body())
    assert data["employee_code"] == "EMP0001"
    assert data["full_name"] == "Ana Lopez"
    assert data["current_project_id"] is None
    assert data["current_project"] is None
    assert data["tenure"]["days"] == 0
    assert data["address"]["country"] == "Guatemala"


async def test_create_missing_field_is_400_with_details(client, employee_body):
    body = employee_body()
    del body["salary"]
    res = await client.post("/api/v1/employees", json=body)
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert any(d["field"].endswith("salary") for d in error["details"])


async def test_create_duplicate_email_is_400(client, employee_body):
    first = await _create(client, employee_body())
    res = await client.post(
        "/api/v1/employees", json=employee_body(email=first["email"]),
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "DUPLICATE_KEY"
    assert error["details"][0]["field"] == "email"


async def test_get_malformed_id_is_400(client):
    res = await client.get("/api/v1/employees/not-an-id")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_IDENTIFIER"


async def test_get_unknown_id_is_404(client):
    res = await client.get(f"/api/v1/employees/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_patch_updates_supplied_fields(client, employee_body):
    created = await _create(client, employee_body())
    res = await client.patch(
        f"/api/v1/employees/{created['id']}", json={"position": "Tech Lead"},
    )
    assert res.status_code == 200
    assert res.json()["position"] == "Tech Lead"
    assert res.json()["email"] == created["email"]


async def test_delete_then_404(client, employee_body):
    created = await _create(client, employee_body())
    res = await client.delete(f"/api/v1/employees/{created['id']}")
    assert res.status_code == 200
    assert res.json()["id"] == created["id"]
    res = await client.get(f"/api/v1/employees/{created['id']}")
    assert res.status_code == 404


async def test_list_available_and_statistics(client, employee_body, project_body):
    free = await _create(client, employee_body())
    busy = await _create(client, employee_body())
    await _create(client, employee_body(status="Inactive"))
    project = (await client.post("/api/v1/projects", json=project_body())).json()
    await client.post(
        f"/api/v1/employees/{busy['id']}/assign-project",
        json={"project_id": project["id"]},
    )

    res = await client.get("/api/v1/employees")
    assert len(res.json()) == 3

    res = await client.get("/api/v1/employees/available")
    assert [e["id"] for e in res.json()] == [free["id"]]

    res = await client.get("/api/v1/employees/statistics")
    assert res.json() == {"total": 3, "active": 2, "inactive": 1}


async def test_assign_visible_on_both_sides(client, employee_body, project_body):
    employee = await _create(client, employee_body())
    project = (await client.post("/api/v1/projects", json=project_body())).json()

    res = await client.post(
        f"/api/v1/employees/{employee['id']}/assign-project",
        json={"project_id": project["id"]},
    )
    assert res.status_code == 200
    assigned = res.json()["employee"]
    assert assigned["current_project_id"] == project["id"]
    assert assigned["current_project"]["project_code"] == "PROJ0001"

    res = await client.get(f"/api/v1/employees/{employee['id']}")
    assert res.json()["current_project_id"] == project["id"]

    res = await client.get(f"/api/v1/projects/{project['id']}/employees")
    assert [e["employee_id"] for e in res.json()] == [employee["id"]]
    assert res.json()[0]["employee"]["employee_code"] == "EMP0001"


async def test_assign_twice_is_conflict(client, employee_body, project_body):
    employee = await _create(client, employee_body())
    p1 = (await client.post("/api/v1/projects", json=project_body())).json()
    p2 = (await client.post("/api/v1/projects", json=project_body(name="Mobile"))).json()
    await client.post(
        f"/api/v1/employees/{employee['id']}/assign-project",
        json={"project_id": p1["id"]},
    )

    res = await client.post(
        f"/api/v1/employees/{employee['id']}/assign-project",
        json={"project_id": p2["id"]},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "ASSIGNMENT_CONFLICT"

    res = await client.get(f"/api/v1/employees/{employee['id']}")
    assert res.json()["current_project_id"] == p1["id"]


async def test_assign_malformed_project_id(client, employee_body):
    employee = await _create(client, employee_body())
    res = await client.post(
        f"/api/v1/employees/{employee['id']}/assign-project",
        json={"project_id": "nope"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_IDENTIFIER"


async def test_release(client, employee_body, project_body):
    employee = await _create(client, employee_body())
    project = (await client.post("/api/v1/projects", json=project_body())).json()
    await client.post(
        f"/api/v1/employees/{employee['id']}/assign-project",
        json={"project_id": project["id"]},
    )

    res = await client.post(f"/api/v1/employees/{employee['id']}/release-project")
    assert res.status_code == 200
    assert res.json()["employee"]["current_project_id"] is None

    res = await client.post(f"/api/v1/employees/{employee['id']}/release-project")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "ASSIGNMENT_CONFLICT"
