"""Checks for loosely typed public request bodies.

Public forms accept any JSON value per field, so a wrong type or an oversized
value is reported as 400 ``invalid_input`` here rather than as a schema error.
"""

import re
from typing import Any

from consultations.core.exceptions import InvalidInputError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
INVALID_EMAIL_DETAIL = "Invalid email format"

# matches the String(255) columns
MAX_TEXT_LENGTH = 255


def clean_text(value: Any, field: str, max_length: int | None = MAX_TEXT_LENGTH) -> str | None:
    """Strip a string field; blank becomes ``None``."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidInputError(f"{field} must be a string")

    value = value.strip()
    if max_length is not None and len(value) > max_length:
        raise InvalidInputError(f"{field} must be at most {max_length} characters")
    return value or None


def parse_ids(value: Any, detail: str) -> list[int]:
    """Return the distinct ids of a bulk request, in request order."""
    if not isinstance(value, list) or not value:
        raise InvalidInputError(detail)
    if any(isinstance(item, bool) or not isinstance(item, int) for item in value):
        raise InvalidInputError(detail)
    return list(dict.fromkeys(value))
