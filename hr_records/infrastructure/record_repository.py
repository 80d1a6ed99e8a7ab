"""SQL Record Repository — SQLAlchemy implementation of core RecordRepository.

Invariants:
    - Every write (create/update/delete) is one commit: no cross-record transaction
    - Unknown filter keys raise RecordValidationError (no arbitrary column access)
    - Unique-constraint violations become DuplicateKeyError naming the field
    - find_by_id always re-reads from the DB (populate_existing), so a record
      expired by an earlier rollback in the same session is reloaded, not stale

Design Decisions:
    - One generic base + thin per-aggregate subclasses: the persistence contract is
      identical for employees and projects, only the model and filters differ
    - find_by_filter is an async generator: callers consume lazily with `async for`
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, AsyncIterator
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hr_records.core.errors import DuplicateKeyError, RecordValidationError
from hr_records.infrastructure.database import commit_or_raise

logger = logging.getLogger(__name__)


class SqlRecordRepository:
    """Base CRUD repository for one aggregate model."""

    model: Any = None
    filterable: frozenset[str] = frozenset()
    unique_fields: tuple[str, ...] = ()

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Reads ───────────────────────────────────────────────────

    async def find_by_id(self, record_id: UUID) -> Any | None:
        result = await self.db.execute(
            select(self.model)
            .where(self.model.id == record_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def find_by_filter(self, filters: dict) -> AsyncIterator[Any]:
        query = self._where(select(self.model), filters).order_by(
            self.model.created_at.asc(),
        )
        result = await self.db.execute(query)
        for record in result.scalars():
            yield record

    async def count(self, filters: dict | None = None) -> int:
        query = self._where(
            select(func.count()).select_from(self.model), filters or {},
        )
        result = await self.db.execute(query)
        return result.scalar_one()

    async def find_projections(
        self, record_ids: set[UUID], fields: tuple[str, ...],
    ) -> dict[UUID, dict]:
        """Resolve ids to {id, *fields} dicts. Unknown ids are simply absent."""
        if not record_ids:
            return {}
        result = await self.db.execute(
            select(self.model).where(self.model.id.in_(record_ids)),
        )
        return {
            record.id: {
                "id": record.id,
                **{name: getattr(record, name) for name in fields},
            }
            for record in result.scalars()
        }

    # ─── Writes ──────────────────────────────────────────────────

    async def create(self, doc: dict) -> Any:
        record = self.model(**doc)
        self.db.add(record)
        await self._commit(record, "create")
        await self.db.refresh(record)
        return record

    async def update_by_id(self, record_id: UUID, partial: dict) -> Any | None:
        record = await self.find_by_id(record_id)
        if record is None:
            return None
        for key, value in partial.items():
            self._apply(record, key, value)
        record.updated_at = datetime.now(timezone.utc)
        await self._commit(record, "update")
        await self.db.refresh(record)
        return record

    async def delete_by_id(self, record_id: UUID) -> Any | None:
        record = await self.find_by_id(record_id)
        if record is None:
            return None
        await self.db.delete(record)
        await self._commit(record, "delete")
        return record

    # ─── Internals ───────────────────────────────────────────────

    def _apply(self, record: Any, key: str, value: Any) -> None:
        setattr(record, key, value)

    def _where(self, query, filters: dict):
        for key, value in filters.items():
            if key not in self.filterable:
                raise RecordValidationError(
                    f"Cannot filter {self.model.__tablename__} by '{key}'", key,
                )
            column = getattr(self.model, key)
            if value is None:
                query = query.where(column.is_(None))
            else:
                if isinstance(value, Enum):
                    value = value.value
                query = query.where(column == value)
        return query

    async def _commit(self, record: Any, operation: str) -> None:
        # captured up front: a rollback expires the record
        unique_values = {
            name: getattr(record, name, None) for name in self.unique_fields
        }
        try:
            await commit_or_raise(self.db, f"{self.model.__tablename__}.{operation}")
        except IntegrityError as e:
            field = self._violated_field(str(e))
            logger.warning(
                f"Unique constraint violated on {self.model.__tablename__}.{field}",
                extra={"operation": operation},
            )
            raise DuplicateKeyError(field, unique_values.get(field))

    def _violated_field(self, db_message: str) -> str:
        for name in self.unique_fields:
            if name in db_message:
                return name
        return "id"
