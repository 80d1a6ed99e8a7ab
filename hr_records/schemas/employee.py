"""Employee Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - EmployeeCreate: names 1-100 chars, email lower-cased and pattern-checked, salary >= 0
    - EmployeeUpdate: every field optional; only supplied fields are validated
    - current_project_id / project_assigned_at are NOT writable through these
      schemas; only the assignment endpoints change them
    - EmployeeResponse carries derived attributes (full_name, age, tenure)

Design Decisions:
    - Enums from core/domain_types for category fields: Pydantic rejects unknown values natively
    - field_validator(mode="before") for strip/case transforms so Field constraints
      see the normalized value
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from hr_records.core.derived_attributes import age, full_name, tenure
from hr_records.core.domain_types import (
    BloodType, ContractType, Department, DocumentType, EducationLevel, EmployeeStatus,
)
from hr_records.schemas.common import (
    EMAIL_PATTERN, clean_string_list, reject_explicit_nulls, strip_text,
)


class Address(BaseModel):
    street: str = Field(min_length=1, max_length=200)
    city: str = Field(min_length=1, max_length=100)
    state: str = Field(min_length=1, max_length=100)
    postal_code: str | None = Field(None, max_length=20)
    country: str | None = Field(None, min_length=1, max_length=100)

    @field_validator("*", mode="before")
    @classmethod
    def strip_fields(cls, v):
        return strip_text(v)


class EmergencyContact(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    phone: str = Field(min_length=1, max_length=50)
    relationship: str = Field(min_length=1, max_length=50)

    @field_validator("*", mode="before")
    @classmethod
    def strip_fields(cls, v):
        return strip_text(v)


_TEXT_FIELDS = (
    "first_name", "last_name", "phone", "document_number",
    "position", "created_by", "notes",
)


class EmployeeCreate(BaseModel):
    """Employee creation — every required field of the record."""
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=254, pattern=EMAIL_PATTERN)
    phone: str = Field(min_length=1, max_length=50)
    birth_date: date
    document_type: DocumentType
    document_number: str = Field(min_length=1, max_length=50)
    address: Address

    employee_code: str | None = Field(None, min_length=1, max_length=30)
    position: str = Field(min_length=1, max_length=100)
    department: Department
    hire_date: date | None = None
    salary: float = Field(ge=0)
    contract_type: ContractType
    status: EmployeeStatus = EmployeeStatus.ACTIVE

    education_level: EducationLevel
    skills: list[str] = Field(default_factory=list)
    years_of_experience: int = Field(0, ge=0)
    emergency_contact: EmergencyContact
    blood_type: BloodType | None = None
    allergies: list[str] = Field(default_factory=list)

    created_by: str = Field("System", min_length=1, max_length=100)
    notes: str | None = Field(None, max_length=500)

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def strip_fields(cls, v):
        return strip_text(v)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("employee_code", mode="before")
    @classmethod
    def normalize_code(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("skills", "allergies", mode="before")
    @classmethod
    def clean_lists(cls, v):
        return clean_string_list(v)


class EmployeeUpdate(BaseModel):
    """Partial employee update — only supplied fields change."""
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = Field(None, max_length=254, pattern=EMAIL_PATTERN)
    phone: str | None = Field(None, min_length=1, max_length=50)
    birth_date: date | None = None
    document_type: DocumentType | None = None
    document_number: str | None = Field(None, min_length=1, max_length=50)
    address: Address | None = None

    employee_code: str | None = Field(None, min_length=1, max_length=30)
    position: str | None = Field(None, min_length=1, max_length=100)
    department: Department | None = None
    hire_date: date | None = None
    salary: float | None = Field(None, ge=0)
    contract_type: ContractType | None = None
    status: EmployeeStatus | None = None

    education_level: EducationLevel | None = None
    skills: list[str] | None = None
    years_of_experience: int | None = Field(None, ge=0)
    emergency_contact: EmergencyContact | None = None
    blood_type: BloodType | None = None
    allergies: list[str] | None = None

    notes: str | None = Field(None, max_length=500)

    @field_validator(
        "first_name", "last_name", "phone", "document_number", "position", "notes",
        mode="before",
    )
    @classmethod
    def strip_fields(cls, v):
        return strip_text(v)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("employee_code", mode="before")
    @classmethod
    def normalize_code(cls, v):
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("skills", "allergies", mode="before")
    @classmethod
    def clean_lists(cls, v):
        return clean_string_list(v)

    @model_validator(mode="after")
    def no_null_required_fields(self):
        reject_explicit_nulls(self, frozenset({"blood_type", "notes"}))
        return self


# --- Responses -----------------------------------------------------------------

class ProjectProjection(BaseModel):
    """Display subset of the employee's current project."""
    id: UUID
    name: str
    project_code: str
    status: str


class Tenure(BaseModel):
    years: int
    months: int
    days: int


class EmployeeResponse(BaseModel):
    """Employee as returned by the API — stored fields plus derived attributes."""
    id: UUID
    employee_code: str
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone: str
    birth_date: date
    age: int | None
    document_type: str
    document_number: str
    address: dict
    position: str
    department: str
    hire_date: date
    tenure: Tenure | None
    salary: float
    contract_type: str
    status: str
    education_level: str
    skills: list[str]
    years_of_experience: int
    emergency_contact: dict
    blood_type: str | None
    allergies: list[str]
    current_project_id: UUID | None
    current_project: ProjectProjection | None
    project_assigned_at: datetime | None
    created_by: str
    notes: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(
        cls, record, current_project: dict | None = None, today: date | None = None,
    ) -> "EmployeeResponse":
        today = today or date.today()
        return cls(
            id=record.id,
            employee_code=record.employee_code,
            first_name=record.first_name,
            last_name=record.last_name,
            full_name=full_name(record.first_name, record.last_name),
            email=record.email,
            phone=record.phone,
            birth_date=record.birth_date,
            age=age(record.birth_date, today),
            document_type=record.document_type,
            document_number=record.document_number,
            address=record.address,
            position=record.position,
            department=record.department,
            hire_date=record.hire_date,
            tenure=tenure(record.hire_date, today),
            salary=record.salary,
            contract_type=record.contract_type,
            status=record.status,
            education_level=record.education_level,
            skills=record.skills,
            years_of_experience=record.years_of_experience,
            emergency_contact=record.emergency_contact,
            blood_type=record.blood_type,
            allergies=record.allergies,
            current_project_id=record.current_project_id,
            current_project=current_project,
            project_assigned_at=record.project_assigned_at,
            created_by=record.created_by,
            notes=record.notes,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class EmployeeStatistics(BaseModel):
    total: int
    active: int
    inactive: int
