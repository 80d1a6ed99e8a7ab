"""Project Repository — persistence collaborator for the Project Store.

Invariants:
    - Writing "assignments" replaces the whole entry collection in the given order
    - Entries carrying a known "id" are updated in place (id and assigned_at kept);
      entries without one are inserted; entries left out are deleted (delete-orphan)
"""

from typing import Any

from hr_records.infrastructure.record_repository import SqlRecordRepository
from hr_records.models.project import Project, AssignmentEntry


class ProjectRepository(SqlRecordRepository):
    model = Project
    filterable = frozenset({"project_code", "status", "category", "priority"})
    unique_fields = ("project_code",)

    async def create(self, doc: dict) -> Project:
        entries = _build_entries({}, doc.get("assignments", []))
        return await super().create({**doc, "assignments": entries})

    def _apply(self, record: Any, key: str, value: Any) -> None:
        if key == "assignments":
            existing = {entry.id: entry for entry in record.assignments}
            record.assignments = _build_entries(existing, value)
        else:
            super()._apply(record, key, value)


def _build_entries(
    existing: dict, entries: list[dict],
) -> list[AssignmentEntry]:
    built = []
    for position, data in enumerate(entries):
        entry = existing.get(data.get("id"))
        if entry is None:
            entry = AssignmentEntry(
                employee_id=data["employee_id"],
                assigned_at=data["assigned_at"],
            )
        entry.role = data.get("role")
        entry.allocated_hours = data["allocated_hours"]
        entry.active = data.get("active", True)
        entry.position = position
        built.append(entry)
    return built
