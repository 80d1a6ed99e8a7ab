"""Boundary Protocols — contracts between the stores and persistence.

Invariants:
    - Stores and the coordinator depend on these Protocols, never on SQLAlchemy directly
    - Every write method commits on its own: one call == one independently committed write
    - find_by_id / update_by_id / delete_by_id return None for unknown ids (never raise NotFound)
    - find_by_filter is equality-only on the repository's declared filterable fields

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Records are returned as ORM-like objects with attribute access; partial
      updates go in as plain dicts (only present keys change)
"""

from typing import Any, AsyncIterator, Protocol
from uuid import UUID


class RecordRepository(Protocol):
    """Contract shared by the employee and project persistence collaborators."""
    filterable: frozenset[str]

    async def create(self, doc: dict) -> Any: ...
    async def find_by_id(self, record_id: UUID) -> Any | None: ...
    def find_by_filter(self, filters: dict) -> AsyncIterator[Any]: ...
    async def count(self, filters: dict | None = None) -> int: ...
    async def update_by_id(self, record_id: UUID, partial: dict) -> Any | None: ...
    async def delete_by_id(self, record_id: UUID) -> Any | None: ...
    async def find_projections(
        self, record_ids: set[UUID], fields: tuple[str, ...],
    ) -> dict[UUID, dict]: ...


class SequenceRepository(Protocol):
    """Contract for the named counters behind generated record codes."""
    async def current(self, name: str) -> int | None: ...
    async def initialize(self, name: str, value: int) -> bool: ...
    async def compare_and_set(self, name: str, expected: int, new: int) -> bool: ...
