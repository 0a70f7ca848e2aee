"""Sanitization of untrusted exercise text.

Applied to caller input before it reaches a prompt, and to every string the
classification provider returns before it is trusted.
"""
import re
from typing import Any

from workout_tracker_api.errors import InvalidInputError

MAX_INPUT_LENGTH = 200

_MARKUP_CHARS_RE = re.compile(r"[<>\"']")
_WHITESPACE_RE = re.compile(r"\s+")


def clean(value: Any) -> str:
    """Trim, bound and strip markup metacharacters from exercise text.

    Raises:
        InvalidInputError: if the value is not a string or nothing is left
            after cleaning.
    """
    if not value or not isinstance(value, str):
        raise InvalidInputError("Invalid exercise input")

    cleaned = value.strip()[:MAX_INPUT_LENGTH]
    cleaned = _MARKUP_CHARS_RE.sub("", cleaned)
    # Stripping quotes can expose edge whitespace, trim again so clean() is idempotent
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()

    if not cleaned:
        raise InvalidInputError("Exercise input cannot be empty after sanitization")

    return cleaned
