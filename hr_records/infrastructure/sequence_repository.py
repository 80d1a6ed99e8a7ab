"""Sequence Repository — named counters with a conditional (compare-and-set) increment.

Invariants:
    - compare_and_set only succeeds if the stored value still equals `expected`
    - initialize never overwrites an existing counter (insert-only)
    - Each call is its own committed write
    - Any SQLAlchemy failure (read, update or commit) is rolled back and raised as
      DatabaseError; only the initialize insert race is reported as False
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hr_records.infrastructure.database import commit_or_raise, execute_or_raise
from hr_records.models.sequence_counter import SequenceCounter

logger = logging.getLogger(__name__)


class SqlSequenceRepository:
    """SQLAlchemy implementation of core SequenceRepository."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def current(self, name: str) -> int | None:
        result = await execute_or_raise(
            self.db,
            select(SequenceCounter.value).where(SequenceCounter.name == name),
            "sequence.current",
        )
        return result.scalar_one_or_none()

    async def initialize(self, name: str, value: int) -> bool:
        """Create the counter at `value`. False if another writer created it first."""
        self.db.add(SequenceCounter(name=name, value=value))
        try:
            await commit_or_raise(self.db, "sequence.initialize")
        except IntegrityError:
            logger.info(f"Sequence '{name}' already initialized by another writer")
            return False
        return True

    async def compare_and_set(self, name: str, expected: int, new: int) -> bool:
        result = await execute_or_raise(
            self.db,
            update(SequenceCounter)
            .where(SequenceCounter.name == name)
            .where(SequenceCounter.value == expected)
            .values(value=new)
            .execution_options(synchronize_session=False),
            "sequence.increment",
        )
        await commit_or_raise(self.db, "sequence.increment")
        return result.rowcount == 1
