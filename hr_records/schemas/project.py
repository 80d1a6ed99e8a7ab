"""Project Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - ProjectCreate: name <= 200, description <= 1000, budget >= 0, completion 0-100
    - start_date < end_date is NOT checked here: updates may send one date only,
      so ProjectStore checks the order on the merged record
    - Assignment entries: allocated_hours >= 1; duplicate active employees are
      rejected by ProjectStore, not here
    - ProjectResponse carries derived attributes (duration, days remaining, hours)
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from hr_records.core.derived_attributes import (
    days_remaining, duration_days, total_allocated_hours,
)
from hr_records.core.domain_types import (
    AssignmentRole, Currency, Priority, ProjectCategory, ProjectStatus, RiskLevel,
)
from hr_records.schemas.common import (
    EMAIL_PATTERN, URL_PATTERN, clean_string_list, reject_explicit_nulls, strip_text,
)


class ClientInfo(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(max_length=254, pattern=EMAIL_PATTERN)
    phone: str | None = Field(None, max_length=50)
    company: str | None = Field(None, max_length=200)

    @field_validator("*", mode="before")
    @classmethod
    def strip_fields(cls, v):
        return strip_text(v)

    @field_validator("email", mode="before")
    @classmethod
    def lower_email(cls, v):
        return v.lower() if isinstance(v, str) else v


class Milestone(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    target_date: date
    completed: bool = False
    completed_at: date | None = None


class Risk(BaseModel):
    description: str = Field(min_length=1, max_length=1000)
    level: RiskLevel
    mitigation: str | None = Field(None, max_length=1000)
    identified_at: date = Field(default_factory=date.today)


class AssignmentEntryInput(BaseModel):
    """Assignment entry supplied directly on project create/update."""
    employee_id: UUID
    role: AssignmentRole
    allocated_hours: int = Field(ge=1)
    active: bool = True


_TEXT_FIELDS = ("name", "description", "notes", "repository_url", "demo_url")


class ProjectCreate(BaseModel):
    """Project creation — dates, budget, client and optional initial entries."""
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=1000)
    project_code: str | None = Field(None, min_length=1, max_length=30)

    start_date: date
    end_date: date
    status: ProjectStatus = ProjectStatus.PLANNING
    completion_percentage: int = Field(0, ge=0, le=100)

    priority: Priority = Priority.MEDIUM
    category: ProjectCategory
    budget: float = Field(ge=0)
    currency: Currency = Currency.GTQ
    client: ClientInfo

    assignments: list[AssignmentEntryInput] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)
    repository_url: str | None = Field(None, max_length=500, pattern=URL_PATTERN)
    demo_url: str | None = Field(None, max_length=500, pattern=URL_PATTERN)
    milestones: list[Milestone] = Field(default_factory=list)
    risks: list[Risk] = Field(default_factory=list)
    notes: str | None = Field(None, max_length=1000)
    created_by: str = Field("System", min_length=1, max_length=100)

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def strip_fields(cls, v):
        return strip_text(v)

    @field_validator("project_code", mode="before")
    @classmethod
    def normalize_code(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("technologies", mode="before")
    @classmethod
    def clean_technologies(cls, v):
        return clean_string_list(v)


class ProjectUpdate(BaseModel):
    """Partial project update — only supplied fields change."""
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, min_length=1, max_length=1000)
    project_code: str | None = Field(None, min_length=1, max_length=30)

    start_date: date | None = None
    end_date: date | None = None
    status: ProjectStatus | None = None
    completion_percentage: int | None = Field(None, ge=0, le=100)

    priority: Priority | None = None
    category: ProjectCategory | None = None
    budget: float | None = Field(None, ge=0)
    currency: Currency | None = None
    client: ClientInfo | None = None

    assignments: list[AssignmentEntryInput] | None = None
    technologies: list[str] | None = None
    repository_url: str | None = Field(None, max_length=500, pattern=URL_PATTERN)
    demo_url: str | None = Field(None, max_length=500, pattern=URL_PATTERN)
    milestones: list[Milestone] | None = None
    risks: list[Risk] | None = None
    notes: str | None = Field(None, max_length=1000)
    updated_by: str | None = Field(None, min_length=1, max_length=100)

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def strip_fields(cls, v):
        return strip_text(v)

    @field_validator("project_code", mode="before")
    @classmethod
    def normalize_code(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("technologies", mode="before")
    @classmethod
    def clean_technologies(cls, v):
        return clean_string_list(v)

    @model_validator(mode="after")
    def no_null_required_fields(self):
        reject_explicit_nulls(
            self, frozenset({"repository_url", "demo_url", "notes", "updated_by"}),
        )
        return self


class ProgressUpdate(BaseModel):
    completion_percentage: int = Field(ge=0, le=100)


# --- Responses -----------------------------------------------------------------

class EmployeeProjection(BaseModel):
    """Display subset of an assigned employee."""
    id: UUID
    first_name: str
    last_name: str
    employee_code: str
    department: str
    status: str


class AssignmentEntryResponse(BaseModel):
    id: UUID
    employee_id: UUID
    employee: EmployeeProjection | None
    role: str | None
    assigned_at: datetime
    allocated_hours: int
    active: bool

    @classmethod
    def from_entry(cls, entry: dict, employee: dict | None) -> "AssignmentEntryResponse":
        return cls(**entry, employee=employee)


class ProjectResponse(BaseModel):
    """Project as returned by the API — stored fields plus derived attributes."""
    id: UUID
    project_code: str
    name: str
    description: str
    start_date: date
    end_date: date
    duration_days: int | None
    days_remaining: int | None
    status: str
    completion_percentage: int
    priority: str
    category: str
    budget: float
    currency: str
    client: dict
    assignments: list[AssignmentEntryResponse]
    active_assignments: list[AssignmentEntryResponse]
    total_allocated_hours: int
    technologies: list[str]
    repository_url: str | None
    demo_url: str | None
    milestones: list[dict]
    risks: list[dict]
    notes: str | None
    created_by: str
    updated_by: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(
        cls, record, employees: dict | None = None, today: date | None = None,
    ) -> "ProjectResponse":
        """Build the response; `employees` maps employee_id -> projection dict."""
        today = today or date.today()
        employees = employees or {}
        entries = [entry.to_dict() for entry in record.assignments]
        rendered = [
            AssignmentEntryResponse.from_entry(e, employees.get(e["employee_id"]))
            for e in entries
        ]
        return cls(
            id=record.id,
            project_code=record.project_code,
            name=record.name,
            description=record.description,
            start_date=record.start_date,
            end_date=record.end_date,
            duration_days=duration_days(record.start_date, record.end_date),
            days_remaining=days_remaining(record.end_date, today),
            status=record.status,
            completion_percentage=record.completion_percentage,
            priority=record.priority,
            category=record.category,
            budget=record.budget,
            currency=record.currency,
            client=record.client,
            assignments=rendered,
            active_assignments=[r for r in rendered if r.active],
            total_allocated_hours=total_allocated_hours(entries),
            technologies=record.technologies,
            repository_url=record.repository_url,
            demo_url=record.demo_url,
            milestones=record.milestones,
            risks=record.risks,
            notes=record.notes,
            created_by=record.created_by,
            updated_by=record.updated_by,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
