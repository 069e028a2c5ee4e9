"""Pure predicates over user supplied fields."""

from __future__ import annotations

import re
import string
from typing import Any

SPECIAL_CHARACTERS = string.punctuation

_EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9._%+\-]+@[A-Za-z0-9](?:[A-Za-z0-9\-]*[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9\-]*[A-Za-z0-9])?)*\.[A-Za-z]{2,}$"
)
MIN_PASSWORD_LENGTH = 8


def _encodable(value: str) -> bool:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def not_null(value: Any) -> bool:
    """Return ``True`` when ``value`` is a UTF-8 encodable string with non-whitespace content."""
    return isinstance(value, str) and bool(value.strip()) and _encodable(value)


def email_validation(value: Any) -> bool:
    """Return ``True`` when ``value`` looks like ``local@domain.tld``."""
    if not isinstance(value, str):
        return False
    return _EMAIL_PATTERN.fullmatch(value) is not None


def password_validation(value: Any) -> bool:
    """Return ``True`` when ``value`` meets the password strength rules.

    At least eight characters with one lowercase letter, one uppercase letter,
    one digit and one character from ``SPECIAL_CHARACTERS``. Strings holding
    lone surrogates are rejected because they cannot be stored or hashed.
    """
    if not isinstance(value, str) or len(value) < MIN_PASSWORD_LENGTH:
        return False
    if not _encodable(value):
        return False
    return (
        any(ch.islower() for ch in value)
        and any(ch.isupper() for ch in value)
        and any(ch.isdigit() for ch in value)
        and any(ch in SPECIAL_CHARACTERS for ch in value)
    )
