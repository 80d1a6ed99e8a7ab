"""Code Sequence — generates EMP0001 / PROJ0001 codes from an atomic counter.

Invariants:
    - Every increment is a conditional write: it only lands if no other writer
      moved the counter since it was read (no lost updates, no duplicate values)
    - A missing counter is created at 1; losing that insert race just retries
    - Retries are bounded by max_retries, both for counter contention and for
      skipping generated codes that are already taken
    - Degraded mode (retries exhausted or database failure) NEVER happens silently:
      the result is flagged degraded and a WARNING is logged

Design Decisions:
    - Compare-and-set over SELECT ... FOR UPDATE: works the same on PostgreSQL and
      SQLite, and each attempt is one short committed write
    - Timestamp fallback keeps record creation available when the counter table is
      contended or unreachable; the "T" marker keeps those codes out of the
      sequence's value space
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable

from hr_records.core.entity_codes import format_code, timestamp_code
from hr_records.core.errors import DatabaseError
from hr_records.core.repository_protocols import SequenceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedCode:
    code: str
    degraded: bool = False


class CodeSequence:
    """Named counters turned into prefixed, zero-padded record codes."""

    def __init__(
        self,
        repository: SequenceRepository,
        width: int = 4,
        max_retries: int = 5,
        clock: Callable[[], datetime] | None = None,
    ):
        self.repository = repository
        self.width = width
        self.max_retries = max_retries
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def next_code(self, name: str, prefix: str) -> GeneratedCode:
        try:
            value = await self._increment(name)
        except DatabaseError as e:
            return self._degraded(name, prefix, f"database failure ({e.message})")
        if value is None:
            return self._degraded(
                name, prefix, f"counter contended after {self.max_retries} attempts",
            )
        return GeneratedCode(format_code(prefix, value, self.width))

    async def next_unused_code(
        self,
        name: str,
        prefix: str,
        is_taken: Callable[[str], Awaitable[bool]],
    ) -> GeneratedCode:
        """next_code, skipping codes a client already took.

        After max_retries taken codes in a row the timestamp code is used.
        """
        for _ in range(self.max_retries):
            generated = await self.next_code(name, prefix)
            if generated.degraded or not await is_taken(generated.code):
                return generated
            logger.info(
                f"Generated code {generated.code} already taken, skipping",
                extra={"record_code": generated.code},
            )
        return self._degraded(
            name, prefix, f"{self.max_retries} generated codes already taken",
        )

    async def _increment(self, name: str) -> int | None:
        for _ in range(self.max_retries):
            current = await self.repository.current(name)
            if current is None:
                if await self.repository.initialize(name, 1):
                    return 1
                continue
            if await self.repository.compare_and_set(name, current, current + 1):
                return current + 1
        return None

    def _degraded(self, name: str, prefix: str, reason: str) -> GeneratedCode:
        code = timestamp_code(prefix, self._clock())
        logger.warning(
            f"Sequence '{name}' unavailable: {reason}; using timestamp code",
            extra={"record_code": code, "degraded": True},
        )
        return GeneratedCode(code, degraded=True)
