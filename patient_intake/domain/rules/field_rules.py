"""Single-field validation rules.

Every rule is a frozen value with a ``check(value)`` method returning either
``Valid(normalized)`` or ``Invalid(message)``. Rules never raise: input of an
unexpected type is reported as ``Invalid`` like any other bad value.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Final, Protocol

from pydantic import EmailStr, TypeAdapter, ValidationError

PHONE_PATTERN = r"\([0-9]{3}\) [0-9]{3}-[0-9]{4}"
PHONE_MESSAGE = "Phone must be in format: (123) 456-7890"
SSN_PATTERN = r"[0-9]{3}-[0-9]{2}-[0-9]{4}"
ZIP_CODE_PATTERN = r"[0-9]{5}(-[0-9]{4})?"
EMAIL_MESSAGE = "Invalid email address"

_EMAIL_ADAPTER: Final[TypeAdapter[EmailStr]] = TypeAdapter(EmailStr)
_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


@dataclass(frozen=True, slots=True)
class Valid:
    value: Any

    @property
    def is_valid(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Invalid:
    message: str

    @property
    def is_valid(self) -> bool:
        return False


RuleResult = Valid | Invalid


class FieldRule(Protocol):
    @property
    def required(self) -> bool: ...

    def check(self, value: object) -> RuleResult: ...


def _as_text(value: object) -> str | None:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return None


@dataclass(frozen=True, slots=True)
class RequiredText:
    message: str

    @property
    def required(self) -> bool:
        return True

    def check(self, value: object) -> RuleResult:
        text = _as_text(value)
        if not text:
            return Invalid(self.message)
        return Valid(text)


@dataclass(frozen=True, slots=True)
class OptionalText:
    message: str = "Must be text"

    @property
    def required(self) -> bool:
        return False

    def check(self, value: object) -> RuleResult:
        text = _as_text(value)
        if text is None:
            return Invalid(self.message)
        return Valid(text)


@dataclass(frozen=True, slots=True)
class PatternMatch:
    pattern: str
    message: str
    optional: bool = False

    @property
    def required(self) -> bool:
        return not self.optional

    def check(self, value: object) -> RuleResult:
        text = _as_text(value)
        if text is None:
            return Invalid(self.message)
        if not text and self.optional:
            return Valid("")
        if re.fullmatch(self.pattern, text) is None:
            return Invalid(self.message)
        return Valid(text)


@dataclass(frozen=True, slots=True)
class EmailFormat:
    optional: bool = False
    message: str = EMAIL_MESSAGE

    @property
    def required(self) -> bool:
        return not self.optional

    def check(self, value: object) -> RuleResult:
        text = _as_text(value)
        if text is None:
            return Invalid(self.message)
        if not text and self.optional:
            return Valid("")
        try:
            normalized = _EMAIL_ADAPTER.validate_python(text)
        except ValidationError:
            return Invalid(self.message)
        return Valid(normalized)


@dataclass(frozen=True, slots=True)
class MustEqual:
    expected: Any
    message: str

    @property
    def required(self) -> bool:
        return True

    def check(self, value: object) -> RuleResult:
        # bool is an int subclass; 1 must not pass for True
        if type(value) is not type(self.expected) or value != self.expected:
            return Invalid(self.message)
        return Valid(self.expected)


@dataclass(frozen=True, slots=True)
class IsoDate:
    message: str
    empty_message: str | None = None

    @property
    def required(self) -> bool:
        return True

    def check(self, value: object) -> RuleResult:
        if isinstance(value, datetime):
            return Valid(value.date().isoformat())
        if isinstance(value, date):
            return Valid(value.isoformat())
        text = _as_text(value)
        if text is None:
            return Invalid(self.message)
        if not text:
            return Invalid(self.empty_message or self.message)
        if _ISO_DATE_RE.fullmatch(text) is None:
            return Invalid(self.message)
        try:
            parsed = date.fromisoformat(text)
        except ValueError:
            return Invalid(self.message)
        return Valid(parsed.isoformat())


@dataclass(frozen=True, slots=True)
class Composite:
    rules: tuple[FieldRule, ...]

    @property
    def required(self) -> bool:
        return any(rule.required for rule in self.rules)

    def check(self, value: object) -> RuleResult:
        current: object = value
        for rule in self.rules:
            outcome = rule.check(current)
            if isinstance(outcome, Invalid):
                return outcome
            current = outcome.value
        return Valid(current)


def required_text(message: str) -> RequiredText:
    return RequiredText(message)


def optional_text() -> OptionalText:
    return OptionalText()


def phone(*, optional: bool = False) -> PatternMatch:
    return PatternMatch(PHONE_PATTERN, PHONE_MESSAGE, optional=optional)


def required_email(message: str) -> Composite:
    return Composite((RequiredText(message), EmailFormat()))


def must_be_true(message: str) -> MustEqual:
    return MustEqual(True, message)
