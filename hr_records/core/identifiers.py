"""Record Identifiers — parsing of externally supplied ids.

Invariants:
    - Every id that crosses the HTTP boundary goes through parse_record_id
    - A malformed id raises MalformedIdentifierError (400), never NotFound (404)
"""

from uuid import UUID

from hr_records.core.errors import ErrorContext, MalformedIdentifierError


def parse_record_id(raw_id: str | UUID, resource_type: str) -> UUID:
    """Parse a record id, raising MalformedIdentifierError on bad input."""
    if isinstance(raw_id, UUID):
        return raw_id
    try:
        return UUID(str(raw_id).strip())
    except (ValueError, AttributeError):
        raise MalformedIdentifierError(
            str(raw_id), ErrorContext(resource_type=resource_type),
        )
