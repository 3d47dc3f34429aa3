"""
Input validation helpers shared by the service and the API layer.
"""

import re
from typing import Optional

from pydantic import AnyHttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

CODE_PATTERN = re.compile(r"^[A-Za-z0-9]{6,8}$")

# Paths served by the application itself, never looked up as links
RESERVED_CODES = frozenset({"api", "healthz"})

# AnyHttpUrl, unlike HttpUrl, has no 2083 character cap
_http_url = TypeAdapter(AnyHttpUrl)


def is_valid_url(value: object) -> bool:
    """True for absolute http/https URLs with a host."""
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        parsed = _http_url.validate_python(value)
    except PydanticValidationError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.host)


def normalize_url(value: object) -> object:
    """Strip surrounding whitespace so the stored URL is the one validated."""
    return value.strip() if isinstance(value, str) else value


def is_valid_code(value: object) -> bool:
    return isinstance(value, str) and CODE_PATTERN.fullmatch(value) is not None


def normalize_code(value: object) -> Optional[str]:
    """Strip whitespace; an empty code counts as no code at all."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def is_reserved(code: str) -> bool:
    return code in RESERVED_CODES
