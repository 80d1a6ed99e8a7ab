"""Service test fixtures — async DB, stores, coordinator + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - Payload factories go through the request schemas, so stores receive
      exactly what the routes would hand them

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for store and
      route tests (PostgreSQL-specific features not exercised here)
    - Factories return a fresh unique email/document_number per call, so tests
      create as many records as they need without tripping unique keys
"""

from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from hr_records.db.base import Base
from hr_records.infrastructure.database import get_db, DatabaseSessionManager
from hr_records.infrastructure.employee_repository import EmployeeRepository
from hr_records.infrastructure.project_repository import ProjectRepository
from hr_records.infrastructure.sequence_repository import SqlSequenceRepository
import hr_records.infrastructure.database as db_module
from hr_records.main import app
from hr_records.schemas.employee import EmployeeCreate
from hr_records.schemas.project import ProjectCreate
from hr_records.services.assignment_coordinator import AssignmentCoordinator
from hr_records.services.employee_store import EmployeeStore
from hr_records.services.project_store import ProjectStore
from hr_records.services.sequence_service import CodeSequence


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# ─── Stores ──────────────────────────────────────────────────────

@pytest.fixture
def sequence(test_db):
    return CodeSequence(SqlSequenceRepository(test_db))


@pytest.fixture
def employee_store(test_db, sequence):
    return EmployeeStore(
        EmployeeRepository(test_db), ProjectRepository(test_db), sequence,
    )


@pytest.fixture
def project_store(test_db, sequence):
    return ProjectStore(
        ProjectRepository(test_db), EmployeeRepository(test_db), sequence,
    )


@pytest.fixture
def coordinator(employee_store, project_store):
    return AssignmentCoordinator(employee_store, project_store)


# ─── Payloads ────────────────────────────────────────────────────

def employee_json(**overrides) -> dict:
    """Raw JSON body for POST /employees, unique on every call."""
    tag = uuid4().hex[:8]
    body = {
        "first_name": "Ana",
        "last_name": "Lopez",
        "email": f"ana.{tag}@example.com",
        "phone": "+502 5555 0000",
        "birth_date": "1990-05-10",
        "document_type": "DPI",
        "document_number": f"DPI-{tag}",
        "address": {
            "street": "5a Avenida 10-20",
            "city": "Guatemala",
            "state": "Guatemala",
        },
        "position": "Developer",
        "department": "Development",
        "salary": 8500,
        "contract_type": "Permanent",
        "education_level": "University",
        "emergency_contact": {
            "name": "Maria Lopez",
            "phone": "+502 5555 1111",
            "relationship": "Mother",
        },
    }
    body.update(overrides)
    return body


def project_json(**overrides) -> dict:
    """Raw JSON body for POST /projects."""
    body = {
        "name": "Website Revamp",
        "description": "Redesign of the public website",
        "start_date": "2024-01-01",
        "end_date": "2024-06-01",
        "category": "Web Development",
        "budget": 50000,
        "client": {"name": "Acme", "email": "contact@acme.com"},
    }
    body.update(overrides)
    return body


@pytest.fixture
def employee_fields():
    """Factory: validated employee fields as the store receives them."""
    def make(**overrides) -> dict:
        return EmployeeCreate(**employee_json(**overrides)).model_dump()
    return make


@pytest.fixture
def project_fields():
    """Factory: validated project fields as the store receives them."""
    def make(**overrides) -> dict:
        return ProjectCreate(**project_json(**overrides)).model_dump()
    return make


@pytest.fixture
def create_employee(employee_store, employee_fields):
    async def create(**overrides):
        return await employee_store.create(employee_fields(**overrides))
    return create


@pytest.fixture
def create_project(project_store, project_fields):
    async def create(**overrides):
        return await project_store.create(project_fields(**overrides))
    return create


@pytest.fixture
def employee_body():
    """Factory: raw JSON body for POST /employees."""
    return employee_json


@pytest.fixture
def project_body():
    """Factory: raw JSON body for POST /projects."""
    return project_json
