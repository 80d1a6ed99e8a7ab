"""Record Values — enums stored as values, JSON columns made JSON-native."""

from datetime import date

from hr_records.core.domain_types import AssignmentRole, Department, RiskLevel
from hr_records.core.record_values import to_column_values, to_entry_values


def test_enums_become_values():
    values = to_column_values({"department": Department.SALES}, ())
    assert values == {"department": "Sales"}
    assert type(values["department"]) is str


def test_json_fields_become_json_native():
    data = {"risks": [{"level": RiskLevel.HIGH, "identified_at": date(2024, 1, 2)}]}
    assert to_column_values(data, ("risks",)) == {
        "risks": [{"level": "High", "identified_at": "2024-01-02"}],
    }


def test_non_json_dates_untouched():
    values = to_column_values({"start_date": date(2024, 1, 1)}, ("client",))
    assert values["start_date"] == date(2024, 1, 1)


def test_entry_role_becomes_value():
    assert to_entry_values({"role": AssignmentRole.DEVOPS})["role"] == "DevOps"
    assert to_entry_values({"role": None})["role"] is None
