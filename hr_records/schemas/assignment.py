"""Assignment Schemas — request bodies and result envelopes for the coordinator routes.

Invariants:
    - Ids arrive as plain strings and are parsed by core/identifiers, so a
      malformed id is INVALID_IDENTIFIER (400), not a generic body error
    - role/allocated_hours are optional here; the coordinator requires them only
      when a new entry has to be created
"""

from uuid import UUID

from pydantic import BaseModel, Field

from hr_records.core.domain_types import AssignmentRole
from hr_records.schemas.employee import EmployeeResponse
from hr_records.schemas.project import ProjectResponse


class AssignProjectRequest(BaseModel):
    project_id: str = Field(min_length=1)


class AddEmployeeRequest(BaseModel):
    employee_id: str = Field(min_length=1)
    role: AssignmentRole | None = None
    allocated_hours: int | None = Field(None, ge=1)


class RemoveEmployeeRequest(BaseModel):
    employee_id: str = Field(min_length=1)


class EmployeeAssignmentResult(BaseModel):
    message: str
    employee: EmployeeResponse


class ProjectAssignmentResult(BaseModel):
    message: str
    project: ProjectResponse


class InconsistencyResponse(BaseModel):
    kind: str
    employee_id: UUID
    project_id: UUID | None


class ConsistencyReportResponse(BaseModel):
    consistent: bool
    employees_checked: int
    projects_checked: int
    inconsistencies: list[InconsistencyResponse]
