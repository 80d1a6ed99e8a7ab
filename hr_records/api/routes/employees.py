"""Employee Routes — CRUD, availability, statistics, assign/release.

Invariants:
    - Ids are parsed by core/identifiers: malformed -> 400 INVALID_IDENTIFIER
    - Static paths (/available, /statistics) are registered before /{employee_id}
    - Every employee response carries the current-project projection (or null)
    - Errors are raised as HrRecordsError and rendered by api/error_handlers
"""

from fastapi import APIRouter, Depends, status

from hr_records.api.deps import get_coordinator, get_employee_store
from hr_records.core.domain_types import Aggregate
from hr_records.core.identifiers import parse_record_id
from hr_records.schemas.assignment import (
    AssignProjectRequest, EmployeeAssignmentResult,
)
from hr_records.schemas.employee import (
    EmployeeCreate, EmployeeResponse, EmployeeStatistics, EmployeeUpdate,
)
from hr_records.services.assignment_coordinator import AssignmentCoordinator
from hr_records.services.employee_store import EmployeeStore

router = APIRouter(prefix="/api/v1/employees", tags=["employees"])

EMPLOYEE = Aggregate.EMPLOYEE.value
PROJECT = Aggregate.PROJECT.value


async def render_employees(
    store: EmployeeStore, employees: list,
) -> list[EmployeeResponse]:
    """Responses with each employee's current project resolved in one lookup."""
    projects = await store.current_projects(employees)
    return [
        EmployeeResponse.from_record(e, projects.get(e.current_project_id))
        for e in employees
    ]


async def render_employee(store: EmployeeStore, employee) -> EmployeeResponse:
    return (await render_employees(store, [employee]))[0]


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(store: EmployeeStore = Depends(get_employee_store)):
    employees = [e async for e in store.query()]
    return await render_employees(store, employees)


@router.get("/available", response_model=list[EmployeeResponse])
async def list_available_employees(
    store: EmployeeStore = Depends(get_employee_store),
):
    """Active employees without a current project."""
    employees = [e async for e in store.available()]
    return await render_employees(store, employees)


@router.get("/statistics", response_model=EmployeeStatistics)
async def employee_statistics(store: EmployeeStore = Depends(get_employee_store)):
    return await store.statistics()


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: str, store: EmployeeStore = Depends(get_employee_store),
):
    employee = await store.read(parse_record_id(employee_id, EMPLOYEE))
    return await render_employee(store, employee)


@router.post(
    "", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED,
)
async def create_employee(
    body: EmployeeCreate, store: EmployeeStore = Depends(get_employee_store),
):
    employee = await store.create(body.model_dump())
    return await render_employee(store, employee)


@router.patch("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: str,
    body: EmployeeUpdate,
    store: EmployeeStore = Depends(get_employee_store),
):
    employee = await store.update(
        parse_record_id(employee_id, EMPLOYEE), body.model_dump(exclude_unset=True),
    )
    return await render_employee(store, employee)


@router.delete("/{employee_id}")
async def delete_employee(
    employee_id: str, store: EmployeeStore = Depends(get_employee_store),
):
    record_id = parse_record_id(employee_id, EMPLOYEE)
    await store.delete(record_id)
    return {"message": "Employee deleted", "id": str(record_id)}


@router.post(
    "/{employee_id}/assign-project", response_model=EmployeeAssignmentResult,
)
async def assign_project(
    employee_id: str,
    body: AssignProjectRequest,
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
):
    employee = await coordinator.assign_employee_to_project(
        parse_record_id(employee_id, EMPLOYEE),
        parse_record_id(body.project_id, PROJECT),
    )
    return EmployeeAssignmentResult(
        message="Project assigned",
        employee=await render_employee(coordinator.employees, employee),
    )


@router.post(
    "/{employee_id}/release-project", response_model=EmployeeAssignmentResult,
)
async def release_project(
    employee_id: str,
    coordinator: AssignmentCoordinator = Depends(get_coordinator),
):
    employee = await coordinator.release_employee_from_project(
        parse_record_id(employee_id, EMPLOYEE),
    )
    return EmployeeAssignmentResult(
        message="Employee released from project",
        employee=await render_employee(coordinator.employees, employee),
    )
