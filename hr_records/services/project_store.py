"""Project Store — owns project records and their assignment entry collections.

Invariants:
    - start_date < end_date on create and on the MERGED record of every update
    - Among active entries, employee_id values are pairwise distinct (every save)
    - Status auto-transition on every save: 100% -> Completed,
      progress while Planning -> InProgress
    - project_code unique; generated from the "project_code" sequence when absent
    - read/update/delete on an unknown id raise ResourceNotFoundError

Design Decisions:
    - "assignments" in a partial update replaces the whole collection: the
      coordinator reads the entries, edits the list, and saves it back here
    - Entries without assigned_at get the current time when they are first saved
"""

import logging
from datetime import datetime, timezone
from typing import AsyncIterator
from uuid import UUID

from hr_records.core.domain_types import Aggregate, ProjectId, ProjectStatus
from hr_records.core.enforce_assignments import (
    apply_status_transition, check_completion_range, check_date_order,
    check_entry_hours, check_unique_active_entries,
)
from hr_records.core.errors import DuplicateKeyError, ResourceNotFoundError
from hr_records.core.record_values import to_column_values, to_entry_values
from hr_records.core.repository_protocols import RecordRepository
from hr_records.services.sequence_service import CodeSequence

logger = logging.getLogger(__name__)

JSON_FIELDS = ("client", "technologies", "milestones", "risks")
EMPLOYEE_PROJECTION = (
    "first_name", "last_name", "employee_code", "department", "status",
)


class ProjectStore:
    """Project records plus the employee projection of their entries."""

    def __init__(
        self,
        projects: RecordRepository,
        employees: RecordRepository,
        sequence: CodeSequence,
        code_prefix: str = "PROJ",
    ):
        self.projects = projects
        self.employees = employees
        self.sequence = sequence
        self.code_prefix = code_prefix

    # ─── Writes ──────────────────────────────────────────────────

    async def create(self, fields: dict):
        data = to_column_values(fields, JSON_FIELDS)
        data["assignments"] = self._entries(data.get("assignments") or [])
        check_date_order(data["start_date"], data["end_date"])
        completion = data.get("completion_percentage", 0)
        check_completion_range(completion)
        data["status"] = apply_status_transition(
            ProjectStatus(data.get("status", ProjectStatus.PLANNING)), completion,
        ).value

        if data.get("project_code"):
            await self._check_unique_code(data["project_code"])
        else:
            data["project_code"] = await self._generate_code()

        project = await self.projects.create(data)
        logger.info(
            f"Project created: {project.project_code}",
            extra={"project_id": project.id, "record_code": project.project_code},
        )
        return project

    async def update(self, project_id: ProjectId, partial: dict):
        project = await self.read(project_id)
        data = to_column_values(partial, JSON_FIELDS)

        check_date_order(
            data.get("start_date", project.start_date),
            data.get("end_date", project.end_date),
        )
        completion = data.get("completion_percentage", project.completion_percentage)
        check_completion_range(completion)
        status = ProjectStatus(data.get("status", project.status))
        transitioned = apply_status_transition(status, completion)
        if transitioned != status or "status" in data:
            data["status"] = transitioned.value

        if "assignments" in data:
            data["assignments"] = self._entries(data["assignments"])

        code = data.get("project_code")
        if code is not None and code != project.project_code:
            await self._check_unique_code(code, exclude_id=project.id)

        updated = await self.projects.update_by_id(project.id, data)
        if updated is None:
            raise ResourceNotFoundError(Aggregate.PROJECT.value, str(project_id))
        return updated

    async def update_progress(self, project_id: ProjectId, completion_percentage: int):
        check_completion_range(completion_percentage)
        return await self.update(
            project_id, {"completion_percentage": completion_percentage},
        )

    async def delete(self, project_id: ProjectId):
        deleted = await self.projects.delete_by_id(project_id)
        if deleted is None:
            raise ResourceNotFoundError(Aggregate.PROJECT.value, str(project_id))
        logger.info("Project deleted", extra={"project_id": project_id})
        return deleted

    # ─── Reads ───────────────────────────────────────────────────

    async def find(self, project_id: ProjectId):
        return await self.projects.find_by_id(project_id)

    async def read(self, project_id: ProjectId):
        project = await self.find(project_id)
        if project is None:
            raise ResourceNotFoundError(Aggregate.PROJECT.value, str(project_id))
        return project

    def query(self, filters: dict | None = None) -> AsyncIterator:
        return self.projects.find_by_filter(filters or {})

    def active(self) -> AsyncIterator:
        return self.query({"status": ProjectStatus.IN_PROGRESS})

    async def entry_employees(self, projects: list) -> dict[UUID, dict]:
        """Resolve every entry's employee_id to its display projection.

        Employees that no longer exist are absent from the result.
        """
        ids = {entry.employee_id for p in projects for entry in p.assignments}
        return await self.employees.find_projections(ids, EMPLOYEE_PROJECTION)

    # ─── Internals ───────────────────────────────────────────────

    def _entries(self, entries: list[dict]) -> list[dict]:
        now = datetime.now(timezone.utc)
        prepared = [
            to_entry_values({
                "active": True, **entry,
                "assigned_at": entry.get("assigned_at") or now,
            })
            for entry in entries
        ]
        check_entry_hours(prepared)
        check_unique_active_entries(prepared)
        return prepared

    async def _check_unique_code(self, code: str, exclude_id: UUID | None = None) -> None:
        async for other in self.projects.find_by_filter({"project_code": code}):
            if other.id != exclude_id:
                raise DuplicateKeyError("project_code", code)

    async def _generate_code(self) -> str:
        generated = await self.sequence.next_unused_code(
            "project_code", self.code_prefix, self._code_taken,
        )
        return generated.code

    async def _code_taken(self, code: str) -> bool:
        return await self.projects.count({"project_code": code}) > 0
