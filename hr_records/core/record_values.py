"""Record Values — turns validated schema output into storable column values.

Invariants:
    - Enum members are stored as their str value
    - JSON columns only ever receive JSON-native values (dates become ISO strings)
    - The input dict is never mutated
"""

from enum import Enum
from typing import Iterable

from pydantic_core import to_jsonable_python


def to_column_values(data: dict, json_fields: Iterable[str]) -> dict:
    json_fields = frozenset(json_fields)
    values = {}
    for key, value in data.items():
        if key in json_fields:
            value = to_jsonable_python(value)
        elif isinstance(value, Enum):
            value = value.value
        values[key] = value
    return values


def to_entry_values(entry: dict) -> dict:
    """Assignment entry dict with its role stored as a plain string."""
    role = entry.get("role")
    return {**entry, "role": role.value if isinstance(role, Enum) else role}
