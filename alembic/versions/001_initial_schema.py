"""Initial schema — employees, projects, project_assignments, sequence_counters.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "employees",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(254), nullable=False),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("birth_date", sa.Date, nullable=False),
        sa.Column("document_type", sa.String(20), nullable=False),
        sa.Column("document_number", sa.String(50), nullable=False),
        sa.Column("address", sa.JSON, nullable=False),
        sa.Column("employee_code", sa.String(30), nullable=False),
        sa.Column("position", sa.String(100), nullable=False),
        sa.Column("department", sa.String(30), nullable=False),
        sa.Column("hire_date", sa.Date, nullable=False),
        sa.Column("salary", sa.Float, nullable=False),
        sa.Column("contract_type", sa.String(20), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="Active"),
        sa.Column("education_level", sa.String(20), nullable=False),
        sa.Column("skills", sa.JSON, nullable=False),
        sa.Column("years_of_experience", sa.Integer, nullable=False, server_default="0"),
        sa.Column("emergency_contact", sa.JSON, nullable=False),
        sa.Column("blood_type", sa.String(3), nullable=True),
        sa.Column("allergies", sa.JSON, nullable=False),
        sa.Column("current_project_id", UUID(as_uuid=True), nullable=True),
        sa.Column("project_assigned_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_by", sa.String(100), nullable=False, server_default="System"),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_employees_email", "employees", ["email"], unique=True)
    op.create_index("ix_employees_document_number", "employees", ["document_number"], unique=True)
    op.create_index("ix_employees_employee_code", "employees", ["employee_code"], unique=True)
    op.create_index("ix_employees_department", "employees", ["department"])
    op.create_index("ix_employees_status", "employees", ["status"])
    op.create_index("ix_employees_current_project_id", "employees", ["current_project_id"])

    op.create_table(
        "projects",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("project_code", sa.String(30), nullable=False),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="Planning"),
        sa.Column("completion_percentage", sa.Integer, nullable=False, server_default="0"),
        sa.Column("priority", sa.String(20), nullable=False, server_default="Medium"),
        sa.Column("category", sa.String(30), nullable=False),
        sa.Column("budget", sa.Float, nullable=False),
        sa.Column("currency", sa.String(3), nullable=False, server_default="GTQ"),
        sa.Column("client", sa.JSON, nullable=False),
        sa.Column("technologies", sa.JSON, nullable=False),
        sa.Column("repository_url", sa.String(500), nullable=True),
        sa.Column("demo_url", sa.String(500), nullable=True),
        sa.Column("milestones", sa.JSON, nullable=False),
        sa.Column("risks", sa.JSON, nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("created_by", sa.String(100), nullable=False, server_default="System"),
        sa.Column("updated_by", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_projects_project_code", "projects", ["project_code"], unique=True)
    op.create_index("ix_projects_start_date", "projects", ["start_date"])
    op.create_index("ix_projects_end_date", "projects", ["end_date"])
    op.create_index("ix_projects_status", "projects", ["status"])

    op.create_table(
        "project_assignments",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "project_id", UUID(as_uuid=True),
            sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("employee_id", UUID(as_uuid=True), nullable=False),
        sa.Column("role", sa.String(30), nullable=True),
        sa.Column("assigned_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("allocated_hours", sa.Integer, nullable=False),
        sa.Column("active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
    )
    op.create_index("ix_project_assignments_project_id", "project_assignments", ["project_id"])
    op.create_index("ix_project_assignments_employee_id", "project_assignments", ["employee_id"])

    op.create_table(
        "sequence_counters",
        sa.Column("name", sa.String(50), primary_key=True),
        sa.Column("value", sa.Integer, nullable=False, server_default="0"),
    )


def downgrade() -> None:
    op.drop_table("sequence_counters")
    op.drop_table("project_assignments")
    op.drop_table("projects")
    op.drop_table("employees")
