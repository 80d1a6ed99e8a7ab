"""Derived Attributes — read-only values computed from stored employee/project fields.

Invariants:
    - Nothing here is persisted; every value is recomputed on read
    - `today` is always a parameter so results are deterministic in tests
    - Missing inputs yield None, never an exception

Design Decisions:
    - Dates, not datetimes: birth/hire/start/end are calendar dates, so day
      arithmetic needs no timezone handling
"""

from datetime import date
from typing import Iterable, Mapping


DAYS_PER_YEAR = 365.25


def full_name(first_name: str, last_name: str) -> str:
    return f"{first_name} {last_name}"


def age(birth_date: date | None, today: date) -> int | None:
    """Whole years since birth, using 365.25-day years."""
    if birth_date is None:
        return None
    return int((today - birth_date).days // DAYS_PER_YEAR)


def tenure(hire_date: date | None, today: date) -> dict | None:
    """Time with the company as {years, months, days}.

    `days` is the total day count; years and months are coarse (365/30-day)
    buckets of it, not calendar arithmetic.
    """
    if hire_date is None:
        return None
    days = (today - hire_date).days
    return {
        "years": days // 365,
        "months": (days % 365) // 30,
        "days": days,
    }


def duration_days(start_date: date | None, end_date: date | None) -> int | None:
    if start_date is None or end_date is None:
        return None
    return (end_date - start_date).days


def days_remaining(end_date: date | None, today: date) -> int | None:
    """Days until the end date, floored at zero once it has passed."""
    if end_date is None:
        return None
    return max((end_date - today).days, 0)


def active_entries(entries: Iterable[Mapping]) -> list[Mapping]:
    return [e for e in entries if e["active"]]


def total_allocated_hours(entries: Iterable[Mapping]) -> int:
    """Sum of allocated hours over active entries only."""
    return sum(e["allocated_hours"] for e in active_entries(entries))
