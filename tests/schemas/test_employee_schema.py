"""Employee schemas — normalization and field constraints at the API boundary.

Invariants:
    - Text is stripped before length/pattern checks
    - email lower-cased, employee_code upper-cased
    - Update schema: omitted fields stay unset, explicit null rejected for
      non-nullable fields
"""

from datetime import date, datetime, timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest
from pydantic import ValidationError

from hr_records.schemas.employee import (
    EmployeeCreate, EmployeeResponse, EmployeeUpdate,
)


def _body(**overrides):
    body = {
        "first_name": "  Ana ",
        "last_name": "Lopez",
        "email": " Ana.Lopez@Example.COM ",
        "phone": "+502 5555 0000",
        "birth_date": "1990-05-10",
        "document_type": "DPI",
        "document_number": "1234567890101",
        "address": {"street": "5a Avenida", "city": "Guatemala", "state": "Guatemala"},
        "position": "Developer",
        "department": "Development",
        "salary": 8500,
        "contract_type": "Permanent",
        "education_level": "University",
        "emergency_contact": {
            "name": "Maria Lopez", "phone": "+502 5555 1111", "relationship": "Mother",
        },
    }
    body.update(overrides)
    return body


# --- EmployeeCreate -----------------------------------------------------------

def test_create_normalizes_text_email_and_code():
    e = EmployeeCreate(**_body(employee_code=" emp0042 "))
    assert e.first_name == "Ana"
    assert e.email == "ana.lopez@example.com"
    assert e.employee_code == "EMP0042"


def test_create_defaults():
    e = EmployeeCreate(**_body())
    assert e.status.value == "Active"
    assert e.employee_code is None
    assert e.hire_date is None
    assert e.skills == []
    assert e.years_of_experience == 0
    assert e.created_by == "System"


def test_create_rejects_bad_email():
    with pytest.raises(ValidationError):
        EmployeeCreate(**_body(email="not-an-email"))


def test_create_rejects_negative_salary():
    with pytest.raises(ValidationError):
        EmployeeCreate(**_body(salary=-1))


def test_create_rejects_unknown_department():
    with pytest.raises(ValidationError):
        EmployeeCreate(**_body(department="Legal"))


def test_create_rejects_blank_name_after_strip():
    with pytest.raises(ValidationError):
        EmployeeCreate(**_body(first_name="   "))


def test_create_rejects_long_notes():
    with pytest.raises(ValidationError):
        EmployeeCreate(**_body(notes="x" * 501))


def test_create_cleans_skill_list():
    e = EmployeeCreate(**_body(skills=[" Python ", "", "SQL"]))
    assert e.skills == ["Python", "SQL"]


def test_create_requires_address_city():
    with pytest.raises(ValidationError):
        EmployeeCreate(**_body(address={"street": "5a Avenida", "state": "Guatemala"}))


# --- EmployeeUpdate -----------------------------------------------------------

def test_update_keeps_only_supplied_fields():
    u = EmployeeUpdate(position="Lead")
    assert u.model_dump(exclude_unset=True) == {"position": "Lead"}


def test_update_rejects_null_required_field():
    with pytest.raises(ValidationError):
        EmployeeUpdate(first_name=None)


def test_update_allows_null_notes():
    assert EmployeeUpdate(notes=None).model_dump(exclude_unset=True) == {"notes": None}


def test_update_cannot_set_current_project():
    u = EmployeeUpdate(current_project_id=str(uuid4()))
    assert "current_project_id" not in u.model_dump(exclude_unset=True)


# --- EmployeeResponse ---------------------------------------------------------

def test_response_includes_derived_attributes():
    now = datetime(2024, 3, 1, tzinfo=timezone.utc)
    fields = EmployeeCreate(**_body()).model_dump(mode="json")
    fields.update(
        id=uuid4(), employee_code="EMP0001", current_project_id=None,
        project_assigned_at=None, created_at=now, updated_at=now,
        hire_date=date(2022, 1, 1), birth_date=date(1990, 5, 10),
    )
    record = SimpleNamespace(**fields)
    r = EmployeeResponse.from_record(record, today=date(2024, 3, 1))
    assert r.full_name == "Ana Lopez"
    assert r.age == 33
    assert r.tenure.years == 2
    assert r.current_project is None
