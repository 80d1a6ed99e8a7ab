"""Project Store — date order, status transitions, entry invariants, codes.

Invariants:
    - start_date < end_date on create and on the merged record of every update
    - Duplicate active entries rejected on every save (field "assignments")
    - 100% -> Completed, progress while Planning -> InProgress
"""

from datetime import date
from uuid import uuid4

import pytest

from hr_records.core.errors import (
    DuplicateKeyError, RecordValidationError, ResourceNotFoundError,
)


def _entry(employee_id, active=True, hours=20, role="Tester"):
    return {
        "employee_id": employee_id, "role": role,
        "allocated_hours": hours, "active": active,
    }


async def test_scenario_website_revamp_accepted(create_project):
    project = await create_project()
    assert project.project_code == "PROJ0001"
    assert project.start_date == date(2024, 1, 1)
    assert project.end_date == date(2024, 6, 1)
    assert project.status == "Planning"
    assert project.assignments == []


async def test_scenario_website_revamp_rejected_on_end_date(create_project):
    with pytest.raises(RecordValidationError) as exc:
        await create_project(end_date="2023-12-01")
    assert exc.value.field == "end_date"


async def test_update_checks_merged_date_order(create_project, project_store):
    project = await create_project()
    with pytest.raises(RecordValidationError) as exc:
        await project_store.update(project.id, {"start_date": date(2024, 7, 1)})
    assert exc.value.field == "end_date"


async def test_update_moving_both_dates(create_project, project_store):
    project = await create_project()
    updated = await project_store.update(project.id, {
        "start_date": date(2024, 7, 1), "end_date": date(2024, 9, 1),
    })
    assert updated.start_date == date(2024, 7, 1)


async def test_create_with_progress_starts_project(create_project):
    project = await create_project(completion_percentage=10)
    assert project.status == "InProgress"


async def test_update_progress_transitions(create_project, project_store):
    project = await create_project()
    started = await project_store.update_progress(project.id, 30)
    assert started.status == "InProgress"
    done = await project_store.update_progress(project.id, 100)
    assert done.status == "Completed"
    assert done.completion_percentage == 100


async def test_update_progress_out_of_range(create_project, project_store):
    project = await create_project()
    with pytest.raises(RecordValidationError):
        await project_store.update_progress(project.id, 120)


async def test_create_with_entries_keeps_order(create_project):
    a, b = uuid4(), uuid4()
    project = await create_project(assignments=[
        _entry(a, role="Project Manager"), _entry(b),
    ])
    assert [e.employee_id for e in project.assignments] == [a, b]
    assert project.assignments[0].role == "Project Manager"
    assert project.assignments[0].assigned_at is not None


async def test_create_rejects_duplicate_active_entries(create_project):
    employee_id = uuid4()
    with pytest.raises(RecordValidationError) as exc:
        await create_project(assignments=[_entry(employee_id), _entry(employee_id)])
    assert exc.value.field == "assignments"


async def test_inactive_duplicate_allowed(create_project):
    employee_id = uuid4()
    project = await create_project(assignments=[
        _entry(employee_id), _entry(employee_id, active=False),
    ])
    assert len(project.assignments) == 2


async def test_update_rejects_duplicate_active_entries(create_project, project_store):
    employee_id = uuid4()
    project = await create_project(assignments=[_entry(employee_id)])
    entries = [e.to_dict() for e in project.assignments] + [_entry(employee_id)]
    with pytest.raises(RecordValidationError):
        await project_store.update(project.id, {"assignments": entries})
    assert len((await project_store.read(project.id)).assignments) == 1


async def test_saving_entries_back_keeps_ids(create_project, project_store):
    project = await create_project(assignments=[_entry(uuid4())])
    entries = [e.to_dict() for e in project.assignments]
    original_id = entries[0]["id"]
    entries.append(_entry(uuid4()))
    updated = await project_store.update(project.id, {"assignments": entries})
    assert updated.assignments[0].id == original_id
    assert len(updated.assignments) == 2


async def test_duplicate_project_code(create_project):
    await create_project(project_code="PROJ0100")
    with pytest.raises(DuplicateKeyError) as exc:
        await create_project(project_code="proj0100")
    assert exc.value.field == "project_code"


async def test_active_lists_in_progress_only(create_project, project_store):
    await create_project()
    running = await create_project(completion_percentage=40)
    await create_project(status="Paused")
    assert [p.id async for p in project_store.active()] == [running.id]


async def test_query_by_category(create_project, project_store):
    await create_project(category="API")
    await create_project()
    found = [p async for p in project_store.query({"category": "API"})]
    assert len(found) == 1


async def test_delete(create_project, project_store):
    project = await create_project()
    await project_store.delete(project.id)
    with pytest.raises(ResourceNotFoundError):
        await project_store.read(project.id)


async def test_entry_employees_skips_missing(create_employee, create_project, project_store):
    employee = await create_employee()
    missing_id = uuid4()
    project = await create_project(assignments=[_entry(employee.id), _entry(missing_id)])
    projections = await project_store.entry_employees([project])
    assert projections[employee.id]["employee_code"] == "EMP0001"
    assert missing_id not in projections
