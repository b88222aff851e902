"""
Input validation helpers.

Predicates return ``False`` for anything that is not a string instead of
raising, so they can be used directly in schema validators.
"""
import math
import re
from typing import Any, Tuple
from urllib.parse import urlparse

from accounthub.core.exceptions import ValidationError

UUID_V4_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$", re.IGNORECASE
)
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
APP_KEY_RE = re.compile(r"^ak_[a-zA-Z0-9]{32}$")

MAX_EMAIL_LENGTH = 255
MAX_SANITIZED_LENGTH = 1000
MAX_PAGE_SIZE = 100


def is_valid_uuid(value: Any) -> bool:
    """True for a version 4 UUID string, in any letter case."""
    if not value or not isinstance(value, str):
        return False
    return UUID_V4_RE.match(value) is not None


def is_valid_email(value: Any) -> bool:
    if not value or not isinstance(value, str):
        return False
    return EMAIL_RE.match(value) is not None and len(value) <= MAX_EMAIL_LENGTH


def is_valid_url(value: Any) -> bool:
    """Only absolute http and https URLs are accepted."""
    if not value or not isinstance(value, str):
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def is_valid_slug(value: Any) -> bool:
    if not value or not isinstance(value, str):
        return False
    return SLUG_RE.match(value) is not None and 3 <= len(value) <= 100


def is_valid_app_key(value: Any) -> bool:
    # ak_ followed by 32 alphanumerics
    if not value or not isinstance(value, str):
        return False
    return APP_KEY_RE.match(value) is not None


def sanitize_string(value: Any) -> str:
    if not value or not isinstance(value, str):
        return ""
    return re.sub(r"[<>]", "", value).strip()[:MAX_SANITIZED_LENGTH]


def validate_pagination(page: float | None = None, limit: float | None = None) -> Tuple[int, int]:
    """
    Clamp pagination parameters.

    Returns a ``(page, limit)`` tuple with ``page >= 1`` and
    ``1 <= limit <= 100``. Missing or zero values fall back to page 1 and
    10 rows.
    """
    valid_page = max(1, math.floor(page or 1))
    valid_limit = min(MAX_PAGE_SIZE, max(1, math.floor(limit or 10)))
    return valid_page, valid_limit


def ensure_uuid(value: Any, message: str = "Invalid ID format") -> str:
    """Return ``value`` unchanged if it is a v4 UUID, raise ``ValidationError`` otherwise."""
    if not is_valid_uuid(value):
        raise ValidationError(message, details={"value": value})
    return value
