"""Entity Codes — tests for sequence and timestamp code formats."""

from datetime import datetime, timezone

from hr_records.core.entity_codes import format_code, normalize_code, timestamp_code


def test_format_code_pads_to_width():
    assert format_code("EMP", 1) == "EMP0001"
    assert format_code("PROJ", 42) == "PROJ0042"


def test_format_code_never_truncates():
    assert format_code("EMP", 12345) == "EMP12345"


def test_timestamp_code_uses_epoch_millis():
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert timestamp_code("EMP", now) == "EMPT1704067200000"


def test_normalize_code_strips_and_uppercases():
    assert normalize_code("  emp0007 ") == "EMP0007"
