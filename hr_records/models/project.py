"""Project ORM — persists a project and its ordered assignment entries.

Invariants:
    - id is UUID primary key; project_code is unique
    - start_date < end_date (enforced by ProjectStore on the merged record)
    - Among active assignment entries, employee_id values are pairwise distinct
      (enforced by ProjectStore before every write)
    - Entries keep insertion order via `position`

Design Decisions:
    - AssignmentEntry is owned by the project (cascade delete-orphan): replacing the
      collection is how the project side of an assignment is written
    - AssignmentEntry.employee_id has no ForeignKey: deleting an employee leaves its
      entries in place (stale references are reported, not cascaded)
    - JSON for client/technologies/milestones/risks: owned value objects, never
      queried by field
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import (
    String, Text, Integer, Float, Boolean, Date, DateTime, JSON, ForeignKey,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from hr_records.db.base import Base


class Project(Base):
    """Project aggregate — owns its assignment entries."""
    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    project_code: Mapped[str] = mapped_column(
        String(30), nullable=False, unique=True, index=True,
    )

    # Schedule
    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    end_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="Planning", index=True,
    )
    completion_percentage: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )

    # Classification
    priority: Mapped[str] = mapped_column(
        String(20), nullable=False, default="Medium",
    )
    category: Mapped[str] = mapped_column(String(30), nullable=False)

    # Budget
    budget: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[str] = mapped_column(
        String(3), nullable=False, default="GTQ",
    )
    client: Mapped[dict] = mapped_column(JSON, nullable=False)

    # Technical
    technologies: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    repository_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    demo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Tracking
    milestones: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    risks: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_by: Mapped[str] = mapped_column(
        String(100), nullable=False, default="System",
    )
    updated_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
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

    # Relationships
    assignments: Mapped[list["AssignmentEntry"]] = relationship(
        "AssignmentEntry", back_populates="project",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="AssignmentEntry.position",
    )


class AssignmentEntry(Base):
    """One employee's membership in a project — role, hours, active flag."""
    __tablename__ = "project_assignments"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    role: Mapped[str | None] = mapped_column(String(30), nullable=True)
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    allocated_hours: Mapped[int] = mapped_column(Integer, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    project: Mapped["Project"] = relationship(
        "Project", back_populates="assignments",
    )

    def to_dict(self) -> dict:
        """Plain-dict view consumed by core/enforce_assignments."""
        return {
            "id": self.id,
            "employee_id": self.employee_id,
            "role": self.role,
            "assigned_at": self.assigned_at,
            "allocated_hours": self.allocated_hours,
            "active": self.active,
        }
