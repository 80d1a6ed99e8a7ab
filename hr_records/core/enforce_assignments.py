"""Assignment Rules — pure record-level invariants for employees and projects.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - check_* functions raise RecordValidationError on violation, return None otherwise
    - Entry-list helpers never mutate their input; they return a new list

Design Decisions:
    - Entries are plain dicts ({id, employee_id, role, assigned_at, allocated_hours, active}):
      the coordinator edits them without touching the ORM, the repository maps them back
    - Raise, not return-error-dict: stores run these right before a write and the
      HTTP layer already maps HrRecordsError to a response (ADR: uniform error shape)
"""

from datetime import date, datetime
from typing import Iterable, Mapping
from uuid import UUID

from hr_records.core.domain_types import ProjectStatus
from hr_records.core.errors import RecordValidationError


# ─── Employee ────────────────────────────────────────────────────

def check_current_project_pairing(
    current_project_id: UUID | None, project_assigned_at: datetime | None,
) -> None:
    """current_project_id and project_assigned_at are both null or both set."""
    if (current_project_id is None) != (project_assigned_at is None):
        raise RecordValidationError(
            "current_project_id and project_assigned_at must be set together",
            "project_assigned_at",
        )


# ─── Project ─────────────────────────────────────────────────────

def check_date_order(start_date: date, end_date: date) -> None:
    if end_date <= start_date:
        raise RecordValidationError(
            "end_date must be later than start_date", "end_date",
        )


def check_completion_range(completion_percentage: int) -> None:
    if not 0 <= completion_percentage <= 100:
        raise RecordValidationError(
            "completion_percentage must be between 0 and 100",
            "completion_percentage",
        )


def apply_status_transition(
    status: ProjectStatus, completion_percentage: int,
) -> ProjectStatus:
    """100% -> Completed; any progress while still Planning -> InProgress."""
    if completion_percentage == 100 and status != ProjectStatus.COMPLETED:
        return ProjectStatus.COMPLETED
    if completion_percentage > 0 and status == ProjectStatus.PLANNING:
        return ProjectStatus.IN_PROGRESS
    return status


def check_unique_active_entries(entries: Iterable[Mapping]) -> None:
    """No employee may hold two active entries in the same project."""
    seen: set[UUID] = set()
    for entry in entries:
        if not entry["active"]:
            continue
        if entry["employee_id"] in seen:
            raise RecordValidationError(
                f"Employee {entry['employee_id']} is assigned to this "
                f"project more than once",
                "assignments",
            )
        seen.add(entry["employee_id"])


def check_entry_hours(entries: Iterable[Mapping]) -> None:
    for entry in entries:
        if entry["allocated_hours"] < 1:
            raise RecordValidationError(
                "allocated_hours must be at least 1", "allocated_hours",
            )


# ─── Entry-list helpers ──────────────────────────────────────────

def has_entry_for(entries: Iterable[Mapping], employee_id: UUID) -> bool:
    """True if any entry, active or not, references the employee."""
    return any(e["employee_id"] == employee_id for e in entries)


def append_entry(
    entries: list[dict],
    employee_id: UUID,
    role: str | None,
    allocated_hours: int,
    assigned_at: datetime,
) -> list[dict]:
    return [*entries, {
        "employee_id": employee_id,
        "role": role,
        "assigned_at": assigned_at,
        "allocated_hours": allocated_hours,
        "active": True,
    }]


def without_employee(entries: list[dict], employee_id: UUID) -> list[dict]:
    """Drop every entry referencing the employee, keeping order of the rest."""
    return [e for e in entries if e["employee_id"] != employee_id]
