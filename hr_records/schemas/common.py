"""Shared Schema Helpers — patterns and validators reused by employee and project schemas.

Invariants:
    - Text inputs are stripped BEFORE length/pattern constraints run
    - Partial-update schemas reject an explicit null for any non-nullable field
"""

from pydantic import BaseModel

EMAIL_PATTERN = r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$"
URL_PATTERN = r"^https?://.+"


def strip_text(v: object) -> object:
    """mode='before' helper: strip strings, pass anything else through untouched."""
    if isinstance(v, str):
        return v.strip()
    return v


def clean_string_list(v: object) -> object:
    """Strip every item and drop the blank ones (skills, allergies, technologies)."""
    if isinstance(v, list):
        return [s.strip() for s in v if isinstance(s, str) and s.strip()]
    return v


def reject_explicit_nulls(model: BaseModel, nullable: frozenset[str]) -> None:
    """Raise ValueError when a supplied field is null but the column is not."""
    for name in model.model_fields_set:
        if getattr(model, name) is None and name not in nullable:
            raise ValueError(f"{name} cannot be null")
