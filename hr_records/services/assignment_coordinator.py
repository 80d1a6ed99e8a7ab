"""Assignment Coordinator — keeps an employee's current project and the project's
assignment entries in step across two independently stored aggregates.

Invariants:
    - Every operation is two sequential writes, each committed on its own;
      there is no shared transaction
    - All lookups and rule checks run BEFORE the first write, so NotFound,
      Conflict and ValidationError never leave anything half-written
    - assign validates the entry list it is about to save (hours, unique active
      entries) before the employee write
    - Write order:
        assign:  employee -> project
        release: project (if it still exists) -> employee
        add:     project (only if a new entry is needed) -> employee
        remove:  project -> employee (if it still exists)
    - A failure of the second write after the first committed raises
      PartialAssignmentError (logged at ERROR); nothing is compensated
    - add_employee_to_project always moves the employee to the project, even
      from another project; remove_employee_from_project always clears the
      employee's pair, even when it points at a different project

Design Decisions:
    - Report partial writes instead of compensating: a compensating write can
      fail too, and the consistency report already finds both kinds of leftover
      (ADR: no hidden repair)
    - Entries are edited as plain dicts (core/enforce_assignments) and saved back
      through ProjectStore, so every save re-runs the unique-active-entry check
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from hr_records.core.consistency_report import find_inconsistencies
from hr_records.core.domain_types import (
    Aggregate, AssignmentOperation, EmployeeId, ProjectId,
)
from hr_records.core.enforce_assignments import (
    append_entry, check_entry_hours, check_unique_active_entries, has_entry_for,
    without_employee,
)
from hr_records.core.errors import (
    AssignmentConflictError, ErrorContext, HrRecordsError,
    PartialAssignmentError, RecordValidationError,
)
from hr_records.services.employee_store import EmployeeStore
from hr_records.services.project_store import ProjectStore

logger = logging.getLogger(__name__)

CLEARED_PAIR = {"current_project_id": None, "project_assigned_at": None}


class AssignmentCoordinator:
    """assign / release / add / remove plus the read-only consistency report."""

    def __init__(
        self,
        employees: EmployeeStore,
        projects: ProjectStore,
        default_role: str | None = None,
        default_hours: int = 40,
    ):
        self.employees = employees
        self.projects = projects
        self.default_role = default_role
        self.default_hours = default_hours

    async def assign_employee_to_project(
        self, employee_id: EmployeeId, project_id: ProjectId,
    ):
        """Point the employee at the project and append a default entry."""
        employee = await self.employees.read(employee_id)
        if employee.current_project_id is not None:
            raise AssignmentConflictError(
                "Employee already has an assigned project",
                ErrorContext(
                    resource_type=Aggregate.EMPLOYEE.value,
                    record_id=str(employee_id),
                    operation=AssignmentOperation.ASSIGN.value,
                ),
            )
        project = await self.projects.read(project_id)
        now = datetime.now(timezone.utc)
        entries = append_entry(
            _entries_of(project), employee_id,
            self.default_role, self.default_hours, now,
        )
        check_entry_hours(entries)
        check_unique_active_entries(entries)

        employee = await self.employees.update(employee_id, {
            "current_project_id": project_id, "project_assigned_at": now,
        })
        async with self._second_write(
            AssignmentOperation.ASSIGN, Aggregate.EMPLOYEE, employee_id, project_id,
        ):
            await self.projects.update(project_id, {"assignments": entries})
        logger.info(
            "Employee assigned to project",
            extra={"employee_id": employee_id, "project_id": project_id},
        )
        return employee

    async def release_employee_from_project(self, employee_id: EmployeeId):
        """Drop the employee's entries from its current project and clear the pair."""
        employee = await self.employees.read(employee_id)
        project_id = employee.current_project_id
        if project_id is None:
            raise AssignmentConflictError(
                "Employee has no assigned project",
                ErrorContext(
                    resource_type=Aggregate.EMPLOYEE.value,
                    record_id=str(employee_id),
                    operation=AssignmentOperation.RELEASE.value,
                ),
            )

        project = await self.projects.find(project_id)
        if project is None:
            logger.warning(
                "Current project no longer exists, clearing employee only",
                extra={"employee_id": employee_id, "project_id": project_id},
            )
        else:
            await self.projects.update(project_id, {
                "assignments": without_employee(_entries_of(project), employee_id),
            })

        async with self._second_write(
            AssignmentOperation.RELEASE, Aggregate.PROJECT, employee_id, project_id,
            first_committed=project is not None,
        ):
            employee = await self.employees.update(employee_id, CLEARED_PAIR)
        logger.info(
            "Employee released from project",
            extra={"employee_id": employee_id, "project_id": project_id},
        )
        return employee

    async def add_employee_to_project(
        self,
        project_id: ProjectId,
        employee_id: EmployeeId,
        role: str | None = None,
        allocated_hours: int | None = None,
    ):
        """Ensure an entry exists, then move the employee to this project.

        An existing entry (active or not) is left as it is; role and
        allocated_hours are only required when a new entry is appended.
        """
        project = await self.projects.read(project_id)
        await self.employees.read(employee_id)
        entries = _entries_of(project)
        now = datetime.now(timezone.utc)

        needs_entry = not has_entry_for(entries, employee_id)
        if needs_entry:
            for name, value in (("role", role), ("allocated_hours", allocated_hours)):
                if value is None:
                    raise RecordValidationError(
                        f"{name} is required to add a new employee to a project",
                        name,
                        ErrorContext(operation=AssignmentOperation.ADD.value),
                    )
            project = await self.projects.update(project_id, {
                "assignments": append_entry(
                    entries, employee_id, role, allocated_hours, now,
                ),
            })

        async with self._second_write(
            AssignmentOperation.ADD, Aggregate.PROJECT, employee_id, project_id,
            first_committed=needs_entry,
        ):
            await self.employees.update(employee_id, {
                "current_project_id": project_id, "project_assigned_at": now,
            })
        logger.info(
            "Employee added to project",
            extra={"employee_id": employee_id, "project_id": project_id},
        )
        return project

    async def remove_employee_from_project(
        self, project_id: ProjectId, employee_id: EmployeeId,
    ):
        """Drop the employee's entries and clear its pair unconditionally."""
        project = await self.projects.read(project_id)
        project = await self.projects.update(project_id, {
            "assignments": without_employee(_entries_of(project), employee_id),
        })

        async with self._second_write(
            AssignmentOperation.REMOVE, Aggregate.PROJECT, employee_id, project_id,
        ):
            employee = await self.employees.find(employee_id)
            if employee is not None:
                if employee.current_project_id not in (None, project_id):
                    logger.warning(
                        "Clearing employee pointed at a different project",
                        extra={
                            "employee_id": employee_id,
                            "project_id": employee.current_project_id,
                        },
                    )
                await self.employees.update(employee_id, CLEARED_PAIR)
        logger.info(
            "Employee removed from project",
            extra={"employee_id": employee_id, "project_id": project_id},
        )
        return project

    async def consistency_report(self) -> dict:
        """Read-only scan of both stores for disagreeing assignment views."""
        employees = [
            {"id": e.id, "current_project_id": e.current_project_id}
            async for e in self.employees.query()
        ]
        projects = [
            {"id": p.id, "assignments": _entries_of(p)}
            async for p in self.projects.query()
        ]
        findings = find_inconsistencies(employees, projects)
        if findings:
            logger.warning(f"Consistency report found {len(findings)} problem(s)")
        return {
            "consistent": not findings,
            "employees_checked": len(employees),
            "projects_checked": len(projects),
            "inconsistencies": [f.to_dict() for f in findings],
        }

    @asynccontextmanager
    async def _second_write(
        self,
        operation: AssignmentOperation,
        committed: Aggregate,
        employee_id: EmployeeId,
        project_id: ProjectId | None,
        first_committed: bool = True,
    ):
        """Turn a failure after a committed first write into PartialAssignmentError."""
        try:
            yield
        except HrRecordsError as e:
            if not first_committed:
                raise
            failed = (
                Aggregate.PROJECT if committed == Aggregate.EMPLOYEE
                else Aggregate.EMPLOYEE
            )
            logger.error(
                f"{operation.value}: {committed.value} saved, "
                f"{failed.value} write failed: {e.message}",
                extra={
                    "employee_id": employee_id,
                    "project_id": project_id,
                    "operation": operation.value,
                    "error_code": e.code,
                },
            )
            raise PartialAssignmentError(
                operation.value, committed.value, failed.value, e,
            ) from e


def _entries_of(project) -> list[dict]:
    return [entry.to_dict() for entry in project.assignments]
