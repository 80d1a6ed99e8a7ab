"""Entity Codes — human-readable record codes (EMP0001, PROJ0001).

Invariants:
    - Sequence codes are prefix + zero-padded counter value
    - Timestamp codes carry a "T" marker so they never collide with sequence codes
    - All functions are pure: the clock is passed in, never read
"""

from datetime import datetime


def format_code(prefix: str, value: int, width: int = 4) -> str:
    """EMP + 1 -> EMP0001. Values wider than `width` are not truncated."""
    return f"{prefix}{value:0{width}d}"


def timestamp_code(prefix: str, now: datetime) -> str:
    """Degraded-mode code derived from epoch milliseconds."""
    return f"{prefix}T{int(now.timestamp() * 1000)}"


def normalize_code(code: str) -> str:
    return code.strip().upper()
