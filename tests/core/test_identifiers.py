"""Record Identifiers — malformed ids are INVALID_IDENTIFIER, never NotFound."""

from uuid import UUID, uuid4

import pytest

from hr_records.core.errors import MalformedIdentifierError
from hr_records.core.identifiers import parse_record_id


def test_parses_uuid_string():
    raw = uuid4()
    assert parse_record_id(str(raw), "employee") == raw


def test_passes_uuid_through():
    raw = uuid4()
    assert parse_record_id(raw, "employee") is raw


@pytest.mark.parametrize("raw", ["not-an-id", "123", ""])
def test_rejects_malformed(raw):
    with pytest.raises(MalformedIdentifierError) as exc:
        parse_record_id(raw, "project")
    assert exc.value.code == "INVALID_IDENTIFIER"
    assert exc.value.context.resource_type == "project"


def test_accepts_surrounding_whitespace():
    raw = uuid4()
    assert parse_record_id(f" {raw} ", "employee") == UUID(str(raw))
