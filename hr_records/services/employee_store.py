"""Employee Store — owns employee records: create, read, update, delete, query.

Invariants:
    - email, document_number and employee_code are unique; checked before the write
      (DuplicateKeyError naming the field), the DB unique index backs it up
    - On update only CHANGED unique fields are checked
    - current_project_id / project_assigned_at pairing holds on the MERGED record
      before every write
    - A missing employee_code is generated from the "employee_code" sequence,
      skipping codes a client already took
    - read/update/delete on an unknown id raise ResourceNotFoundError

Design Decisions:
    - Store receives plain dicts (schema model_dump output), so the coordinator
      can write the back-reference pair through the same path as the API
    - query() is lazy (async iterator): callers stream with `async for`
"""

import logging
from datetime import date
from typing import AsyncIterator
from uuid import UUID

from hr_records.core.domain_types import Aggregate, EmployeeId, EmployeeStatus
from hr_records.core.enforce_assignments import check_current_project_pairing
from hr_records.core.errors import DuplicateKeyError, ResourceNotFoundError
from hr_records.core.record_values import to_column_values
from hr_records.core.repository_protocols import RecordRepository
from hr_records.services.sequence_service import CodeSequence

logger = logging.getLogger(__name__)

JSON_FIELDS = ("address", "emergency_contact", "skills", "allergies")
UNIQUE_FIELDS = ("email", "document_number", "employee_code")
PROJECT_PROJECTION = ("name", "project_code", "status")


class EmployeeStore:
    """Employee records plus their current-project projection."""

    def __init__(
        self,
        employees: RecordRepository,
        projects: RecordRepository,
        sequence: CodeSequence,
        code_prefix: str = "EMP",
        default_country: str = "Guatemala",
    ):
        self.employees = employees
        self.projects = projects
        self.sequence = sequence
        self.code_prefix = code_prefix
        self.default_country = default_country

    # ─── Writes ──────────────────────────────────────────────────

    async def create(self, fields: dict):
        data = to_column_values(fields, JSON_FIELDS)
        if data.get("hire_date") is None:
            data["hire_date"] = date.today()
        address = data.get("address")
        if address is not None and not address.get("country"):
            data["address"] = {**address, "country": self.default_country}
        data.setdefault("current_project_id", None)
        data.setdefault("project_assigned_at", None)
        check_current_project_pairing(
            data["current_project_id"], data["project_assigned_at"],
        )

        await self._check_unique(data)
        if not data.get("employee_code"):
            data["employee_code"] = await self._generate_code()

        employee = await self.employees.create(data)
        logger.info(
            f"Employee created: {employee.employee_code}",
            extra={"employee_id": employee.id, "record_code": employee.employee_code},
        )
        return employee

    async def update(self, employee_id: EmployeeId, partial: dict):
        employee = await self.read(employee_id)
        data = to_column_values(partial, JSON_FIELDS)
        check_current_project_pairing(
            data.get("current_project_id", employee.current_project_id),
            data.get("project_assigned_at", employee.project_assigned_at),
        )
        changed = {
            key: value for key, value in data.items()
            if key in UNIQUE_FIELDS and value != getattr(employee, key)
        }
        await self._check_unique(changed, exclude_id=employee.id)

        updated = await self.employees.update_by_id(employee.id, data)
        if updated is None:
            raise ResourceNotFoundError(Aggregate.EMPLOYEE.value, str(employee_id))
        return updated

    async def delete(self, employee_id: EmployeeId):
        deleted = await self.employees.delete_by_id(employee_id)
        if deleted is None:
            raise ResourceNotFoundError(Aggregate.EMPLOYEE.value, str(employee_id))
        logger.info("Employee deleted", extra={"employee_id": employee_id})
        return deleted

    # ─── Reads ───────────────────────────────────────────────────

    async def find(self, employee_id: EmployeeId):
        """Employee or None. The coordinator uses this where absence is tolerated."""
        return await self.employees.find_by_id(employee_id)

    async def read(self, employee_id: EmployeeId):
        employee = await self.find(employee_id)
        if employee is None:
            raise ResourceNotFoundError(Aggregate.EMPLOYEE.value, str(employee_id))
        return employee

    def query(self, filters: dict | None = None) -> AsyncIterator:
        return self.employees.find_by_filter(filters or {})

    def available(self) -> AsyncIterator:
        """Active employees without a current project."""
        return self.query({
            "status": EmployeeStatus.ACTIVE, "current_project_id": None,
        })

    async def statistics(self) -> dict:
        return {
            "total": await self.employees.count(),
            "active": await self.employees.count({"status": EmployeeStatus.ACTIVE}),
            "inactive": await self.employees.count(
                {"status": EmployeeStatus.INACTIVE},
            ),
        }

    async def current_projects(self, employees: list) -> dict[UUID, dict]:
        """Resolve current_project_id -> {id, name, project_code, status}.

        Dangling references are simply absent from the result.
        """
        ids = {e.current_project_id for e in employees if e.current_project_id}
        return await self.projects.find_projections(ids, PROJECT_PROJECTION)

    # ─── Internals ───────────────────────────────────────────────

    async def _check_unique(self, data: dict, exclude_id: UUID | None = None) -> None:
        for name in UNIQUE_FIELDS:
            value = data.get(name)
            if value is None:
                continue
            async for other in self.employees.find_by_filter({name: value}):
                if other.id != exclude_id:
                    raise DuplicateKeyError(name, value)

    async def _generate_code(self) -> str:
        generated = await self.sequence.next_unused_code(
            "employee_code", self.code_prefix, self._code_taken,
        )
        return generated.code

    async def _code_taken(self, code: str) -> bool:
        return await self.employees.count({"employee_code": code}) > 0
