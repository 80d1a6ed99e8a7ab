"""Project Routes — CRUD, active projects, progress, add/remove employee.

Invariants:
    - Ids are parsed by core/identifiers: malformed -> 400 INVALID_IDENTIFIER
    - /active is registered before /{project_id}
    - Assignment entries are returned with their employee projection (null for
      employees that no longer exist)
"""

from fastapi import APIRouter, Depends, status

from hr_records.api.deps import get_coordinator, get_project_store
from hr_records.core.domain_types import Aggregate
from hr_records.core.identifiers import parse_record_id
from hr_records.schemas.assignment import (
    AddEmployeeRequest, ProjectAssignmentResult, RemoveEmployeeRequest,
)
from hr_records.schemas.project import (
    AssignmentEntryResponse, ProgressUpdate, ProjectCreate, ProjectResponse,
    ProjectUpdate,
)
from hr_records.services.assignment_coordinator import AssignmentCoordinator
from hr_records.services.project_store import ProjectStore

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])

EMPLOYEE = Aggregate.EMPLOYEE.value
PROJECT = Aggregate.PROJECT.value


async def render_projects(store: ProjectStore, projects: list) -> list[ProjectResponse]:
    employees = await store.entry_employees(projects)
    return [ProjectResponse.from_record(p, employees) for p in projects]


async def render_project(store: ProjectStore, project) -> ProjectResponse:
    return (await render_projects(store, [project]))[0]


@router.get("", response_model=list[ProjectResponse])
async def list_projects(store: ProjectStore = Depends(get_project_store)):
    projects = [p async for p in store.query()]
    return await render_projects(store, projects)


@router.get("/active", response_model=list[ProjectResponse])
async def list_active_projects(store: ProjectStore = Depends(get_project_store)):
    """Projects currently in progress."""
    projects = [p async for p in store.active()]
    return await render_projects(store, projects)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str, store: ProjectStore = Depends(get_project_store),
):
    project = await store.read(parse_record_id(project_id, PROJECT))
    return await render_project(store, project)


@router.get(
    "/{project_id}/employees", response_model=list[AssignmentEntryResponse],
)
async def list_project_employees(
    project_id: str, store: ProjectStore = Depends(get_project_store),
):
    project = await store.read(parse_record_id(project_id, PROJECT))
    return (await render_project(store, project)).assignments


@router.post(
    "", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED,
)
async def create_project(
    body: ProjectCreate, store: ProjectStore = Depends(get_project_store),
):
    project = await store.create(body.model_dump())
    return await render_project(store, project)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    body: ProjectUpdate,
    store: ProjectStore = Depends(get_project_store),
):
    project = await store.update(
        parse_record_id(project_id, PROJECT), body.model_dump(exclude_unset=True),
    )
    return await render_project(store, project)


@router.patch("/{project_id}/progress", response_model=ProjectResponse)
async def update_progress(
    project_id: str,
    body: ProgressUpdate,
    store: ProjectStore = Depends(get_project_store),
):
    project = await store.update_progress(
        parse_record_id(project_id, PROJECT), body.completion_percentage,
    )
    return await render_project(store, project)


@router.delete("/{project_id}")
async def delete_project(
    project_id: str, store: ProjectStore = Depends(get_project_store),
):
    record_id = parse_record_id(project_id, PROJECT)
    await store.delete(record_id)
    return {"message": "Project deleted", "id": str(record_id)}


@router.post(
    "/{project_id}/add-employee", response_model=ProjectAssignmentResult,
)
async def add_employee(
    project_id: str,
    body: AddEmployeeRequest,
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
):
    project = await coordinator.add_employee_to_project(
        parse_record_id(project_id, PROJECT),
        parse_record_id(body.employee_id, EMPLOYEE),
        role=body.role,
        allocated_hours=body.allocated_hours,
    )
    return ProjectAssignmentResult(
        message="Employee added to project",
        project=await render_project(coordinator.projects, project),
    )


@router.post(
    "/{project_id}/remove-employee", response_model=ProjectAssignmentResult,
)
async def remove_employee(
    project_id: str,
    body: RemoveEmployeeRequest,
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
):
    project = await coordinator.remove_employee_from_project(
        parse_record_id(project_id, PROJECT),
        parse_record_id(body.employee_id, EMPLOYEE),
    )
    return ProjectAssignmentResult(
        message="Employee removed from project",
        project=await render_project(coordinator.projects, project),
    )
