"""Employee ORM — persists one employee record.

Invariants:
    - id is UUID primary key (client-side default)
    - email, document_number, employee_code are unique
    - current_project_id and project_assigned_at are both null or both set
      (enforced by EmployeeStore before every write, not by the DB)
    - enum columns store the str value of the core/domain_types Enums

Design Decisions:
    - current_project_id has no ForeignKey: employees and projects are independent
      aggregates, so deleting a project leaves the reference dangling and the
      coordinator tolerates it (ADR: no cross-aggregate constraints)
    - JSON for address/emergency_contact/skills/allergies: owned value objects,
      never queried by field
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import String, Text, Integer, Float, Date, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from hr_records.db.base import Base


class Employee(Base):
    """Employee aggregate — optionally points at one current project."""
    __tablename__ = "employees"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )

    # Personal
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(254), nullable=False, unique=True, index=True,
    )
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    document_type: Mapped[str] = mapped_column(String(20), nullable=False)
    document_number: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True, index=True,
    )
    address: Mapped[dict] = mapped_column(JSON, nullable=False)

    # Employment
    employee_code: Mapped[str] = mapped_column(
        String(30), nullable=False, unique=True, index=True,
    )
    position: Mapped[str] = mapped_column(String(100), nullable=False)
    department: Mapped[str] = mapped_column(
        String(30), nullable=False, index=True,
    )
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)
    salary: Mapped[float] = mapped_column(Float, nullable=False)
    contract_type: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="Active", index=True,
    )

    # Background
    education_level: Mapped[str] = mapped_column(String(20), nullable=False)
    skills: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    years_of_experience: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    emergency_contact: Mapped[dict] = mapped_column(JSON, nullable=False)
    blood_type: Mapped[str | None] = mapped_column(String(3), nullable=True)
    allergies: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    # Assignment back-reference
    current_project_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True, index=True,
    )
    project_assigned_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    # Bookkeeping
    created_by: Mapped[str] = mapped_column(
        String(100), nullable=False, default="System",
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
