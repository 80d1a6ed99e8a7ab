"""SequenceCounter ORM — one named, monotonically increasing counter per row.

Invariants:
    - name is the primary key ("employee_code", "project_code")
    - value only moves forward, via a conditional UPDATE (compare-and-set)
"""

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from hr_records.db.base import Base


class SequenceCounter(Base):
    __tablename__ = "sequence_counters"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
