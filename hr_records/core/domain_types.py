"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EmployeeId, ProjectId wrap UUIDs in store and coordinator signatures
    - All fixed category sets encoded as Enums — no raw string matching
    - Enum values are the exact strings stored in the DB and returned over JSON

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders, Pydantic validates them natively
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

EmployeeId = NewType("EmployeeId", UUID)
ProjectId = NewType("ProjectId", UUID)


# ─── Employee Enums ──────────────────────────────────────────────

class EmployeeStatus(str, Enum):
    """Employment status — only ACTIVE employees are offered as available."""
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SUSPENDED = "Suspended"
    ON_LEAVE = "OnLeave"


class Department(str, Enum):
    DEVELOPMENT = "Development"
    HUMAN_RESOURCES = "Human Resources"
    SALES = "Sales"
    MARKETING = "Marketing"
    FINANCE = "Finance"
    ADMINISTRATION = "Administration"
    TECHNICAL_SUPPORT = "Technical Support"


class DocumentType(str, Enum):
    DPI = "DPI"
    PASSPORT = "Passport"
    LICENSE = "License"


class ContractType(str, Enum):
    PERMANENT = "Permanent"
    TEMPORARY = "Temporary"
    INTERNSHIP = "Internship"
    FREELANCE = "Freelance"


class EducationLevel(str, Enum):
    PRIMARY = "Primary"
    SECONDARY = "Secondary"
    UNIVERSITY = "University"
    MASTERS = "Masters"
    DOCTORATE = "Doctorate"
    TECHNICAL = "Technical"


class BloodType(str, Enum):
    A_POS = "A+"
    A_NEG = "A-"
    B_POS = "B+"
    B_NEG = "B-"
    AB_POS = "AB+"
    AB_NEG = "AB-"
    O_POS = "O+"
    O_NEG = "O-"


# ─── Project Enums ───────────────────────────────────────────────

class ProjectStatus(str, Enum):
    """Project lifecycle — PLANNING/COMPLETED also reached by auto-transition."""
    PLANNING = "Planning"
    IN_PROGRESS = "InProgress"
    PAUSED = "Paused"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class ProjectCategory(str, Enum):
    WEB_DEVELOPMENT = "Web Development"
    MOBILE_APP = "Mobile App"
    API = "API"
    DATABASE = "Database"
    INFRASTRUCTURE = "Infrastructure"
    DESIGN = "Design"
    MARKETING = "Marketing"
    OTHER = "Other"


class Currency(str, Enum):
    GTQ = "GTQ"
    USD = "USD"
    EUR = "EUR"


class AssignmentRole(str, Enum):
    """Role held by an employee inside a project's assignment entry."""
    PROJECT_MANAGER = "Project Manager"
    SENIOR_DEVELOPER = "Senior Developer"
    JUNIOR_DEVELOPER = "Junior Developer"
    DESIGNER = "Designer"
    TESTER = "Tester"
    DEVOPS = "DevOps"
    ANALYST = "Analyst"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


# ─── Coordination Enums ──────────────────────────────────────────

class AssignmentOperation(str, Enum):
    """The four coordinator operations — used in logs and partial-write errors."""
    ASSIGN = "assign_employee_to_project"
    RELEASE = "release_employee_from_project"
    ADD = "add_employee_to_project"
    REMOVE = "remove_employee_from_project"


class Aggregate(str, Enum):
    """The two independently stored aggregates touched by the coordinator."""
    EMPLOYEE = "employee"
    PROJECT = "project"


class InconsistencyKind(str, Enum):
    """Ways the two views of an assignment can disagree."""
    DANGLING_CURRENT_PROJECT = "dangling_current_project"
    MISSING_ENTRY = "missing_entry"
    STALE_ENTRY = "stale_entry"
    UNRECIPROCATED_ENTRY = "unreciprocated_entry"
