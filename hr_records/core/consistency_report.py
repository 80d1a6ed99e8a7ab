"""Consistency Report — finds disagreements between the two views of an assignment.

Invariants:
    - Pure: takes plain snapshots of both stores, performs no IO
    - Only ACTIVE entries are checked against employees' current_project_id
    - Findings are sorted (kind, employee_id, project_id) so output is stable

Design Decisions:
    - Report, don't repair: the employee's current_project_id and the project's
      entry list are updated by separate writes, so after a partial write there is
      no single side that is "right". An operator decides which side to fix.
"""

from dataclasses import dataclass, asdict
from typing import Iterable, Mapping
from uuid import UUID

from hr_records.core.domain_types import InconsistencyKind


@dataclass(frozen=True)
class Inconsistency:
    kind: InconsistencyKind
    employee_id: UUID
    project_id: UUID | None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data


def find_inconsistencies(
    employees: Iterable[Mapping], projects: Iterable[Mapping],
) -> list[Inconsistency]:
    """Compare employee back-references with project entry lists.

    employees: [{"id", "current_project_id"}]
    projects: [{"id", "assignments": [{"employee_id", "active"}, ...]}]
    """
    current: dict[UUID, UUID | None] = {
        e["id"]: e["current_project_id"] for e in employees
    }
    active_by_project: dict[UUID, set[UUID]] = {
        p["id"]: {a["employee_id"] for a in p["assignments"] if a["active"]}
        for p in projects
    }

    findings: list[Inconsistency] = []
    for employee_id, project_id in current.items():
        if project_id is None:
            continue
        if project_id not in active_by_project:
            findings.append(Inconsistency(
                InconsistencyKind.DANGLING_CURRENT_PROJECT, employee_id, project_id,
            ))
        elif employee_id not in active_by_project[project_id]:
            findings.append(Inconsistency(
                InconsistencyKind.MISSING_ENTRY, employee_id, project_id,
            ))

    for project_id, members in active_by_project.items():
        for employee_id in members:
            if employee_id not in current:
                findings.append(Inconsistency(
                    InconsistencyKind.STALE_ENTRY, employee_id, project_id,
                ))
            elif current[employee_id] != project_id:
                findings.append(Inconsistency(
                    InconsistencyKind.UNRECIPROCATED_ENTRY, employee_id, project_id,
                ))

    return sorted(
        findings,
        key=lambda f: (f.kind.value, str(f.employee_id), str(f.project_id)),
    )
