"""Route Dependencies — builds stores and the coordinator on top of the request session.

Invariants:
    - One DB session per request; every store and the coordinator of that request
      share it
    - Business policy (code prefixes, assignment defaults) comes from Settings only
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hr_records.config import Settings, get_settings
from hr_records.infrastructure.database import get_db
from hr_records.infrastructure.employee_repository import EmployeeRepository
from hr_records.infrastructure.project_repository import ProjectRepository
from hr_records.infrastructure.sequence_repository import SqlSequenceRepository
from hr_records.services.assignment_coordinator import AssignmentCoordinator
from hr_records.services.employee_store import EmployeeStore
from hr_records.services.project_store import ProjectStore
from hr_records.services.sequence_service import CodeSequence


def _sequence(db: AsyncSession, settings: Settings) -> CodeSequence:
    return CodeSequence(
        SqlSequenceRepository(db),
        width=settings.code_width,
        max_retries=settings.sequence_max_retries,
    )


async def get_employee_store(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> EmployeeStore:
    return EmployeeStore(
        EmployeeRepository(db),
        ProjectRepository(db),
        _sequence(db, settings),
        code_prefix=settings.employee_code_prefix,
        default_country=settings.default_country,
    )


async def get_project_store(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ProjectStore:
    return ProjectStore(
        ProjectRepository(db),
        EmployeeRepository(db),
        _sequence(db, settings),
        code_prefix=settings.project_code_prefix,
    )


async def get_coordinator(
    employees: EmployeeStore = Depends(get_employee_store),
    projects: ProjectStore = Depends(get_project_store),
    settings: Settings = Depends(get_settings),
) -> AssignmentCoordinator:
    return AssignmentCoordinator(
        employees,
        projects,
        default_role=settings.default_assignment_role,
        default_hours=settings.default_assignment_hours,
    )
