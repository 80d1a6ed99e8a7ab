"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Employee and Project are independent aggregates; no foreign key links them

Design Decisions:
    - One file per aggregate for locality; AssignmentEntry lives with its owner Project
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from hr_records.models.employee import Employee  # noqa: F401
from hr_records.models.project import Project, AssignmentEntry  # noqa: F401
from hr_records.models.sequence_counter import SequenceCounter  # noqa: F401
