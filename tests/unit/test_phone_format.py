from __future__ import annotations

from patient_intake.domain.rules.field_rules import Invalid, phone
from patient_intake.domain.rules.phone_format import format_phone, phone_digits


def test_format_phone_builds_canonical_shape() -> None:
    assert format_phone("5551234567") == "(555) 123-4567"


def test_format_phone_is_noop_on_canonical_input() -> None:
    assert format_phone("(555) 123-4567") == "(555) 123-4567"


def test_format_phone_formats_incrementally() -> None:
    assert format_phone("") == ""
    assert format_phone("5") == "(5"
    assert format_phone("555") == "(555"
    assert format_phone("5551") == "(555) 1"
    assert format_phone("555123") == "(555) 123"
    assert format_phone("5551234") == "(555) 123-4"


def test_format_phone_discards_digits_past_tenth() -> None:
    assert format_phone("555123456789") == "(555) 123-4567"
    assert phone_digits("1-555-123-4567 ext 9") == "1555123456"


def test_format_phone_ignores_punctuation() -> None:
    assert format_phone("555.123.4567") == "(555) 123-4567"
    assert format_phone("(555) 12") == "(555) 12"


def test_format_phone_handles_non_string_input() -> None:
    assert format_phone(None) == ""
    assert format_phone(5551234567) == ""


def test_partial_phone_is_still_rejected() -> None:
    for raw in ("5", "555", "5551", "555123456"):
        formatted = format_phone(raw)
        assert isinstance(phone().check(formatted), Invalid)
