"""Domain Types — verifies identity types and enum values.

Tests:
    - NewType wrappers exist and are callable
    - Enums serialize to the exact strings stored and sent over HTTP
    - Status enums carry exactly the documented members
"""

from uuid import uuid4

from hr_records.core.domain_types import (
    AssignmentOperation, AssignmentRole, EmployeeId, EmployeeStatus,
    InconsistencyKind, ProjectId, ProjectStatus,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert EmployeeId(uid) == uid
    assert ProjectId(uid) == uid


def test_employee_status_values():
    assert {s.value for s in EmployeeStatus} == {
        "Active", "Inactive", "Suspended", "OnLeave",
    }


def test_project_status_values():
    assert [s.value for s in ProjectStatus] == [
        "Planning", "InProgress", "Paused", "Completed", "Cancelled",
    ]


def test_enums_compare_equal_to_their_value():
    assert AssignmentRole.PROJECT_MANAGER == "Project Manager"
    assert EmployeeStatus("Active") is EmployeeStatus.ACTIVE


def test_operation_names_match_coordinator_methods():
    assert AssignmentOperation.ADD.value == "add_employee_to_project"
    assert len(AssignmentOperation) == 4


def test_inconsistency_kinds():
    assert len(InconsistencyKind) == 4
