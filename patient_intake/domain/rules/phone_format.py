from __future__ import annotations

import re

PHONE_DIGITS = 10

_NON_DIGIT_RE = re.compile(r"[^0-9]")


def phone_digits(raw: object) -> str:
    if not isinstance(raw, str):
        return ""
    return _NON_DIGIT_RE.sub("", raw)[:PHONE_DIGITS]


def format_phone(raw: object) -> str:
    """Reformat keystroke input towards ``(123) 456-7890``.

    Non-digits are dropped and digits past the tenth are discarded. Partial
    input yields a partial shape (``"(555) 12"``) that the phone rule still
    rejects.
    """
    digits = phone_digits(raw)
    area, exchange, line = digits[:3], digits[3:6], digits[6:]
    formatted = ""
    if area:
        formatted = f"({area}"
    if exchange:
        formatted += f") {exchange}"
    if line:
        formatted += f"-{line}"
    return formatted
