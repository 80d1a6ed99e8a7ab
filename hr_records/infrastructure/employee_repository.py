"""Employee Repository — persistence collaborator for the Employee Store."""

from hr_records.infrastructure.record_repository import SqlRecordRepository
from hr_records.models.employee import Employee


class EmployeeRepository(SqlRecordRepository):
    model = Employee
    filterable = frozenset({
        "email", "document_number", "employee_code",
        "department", "status", "current_project_id",
    })
    unique_fields = ("email", "document_number", "employee_code")
