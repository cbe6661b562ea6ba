from __future__ import annotations

import math
import re
from typing import Any, Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must not exceed {max_len} characters")
    return value


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: Optional[str]) -> str:
    email = require_non_empty(value, "Email")
    if not _EMAIL_RE.match(email):
        raise ValidationError("Invalid email format")
    return email.lower()


def require_number(value: Any, field_name: str) -> float:
    """Accept JSON numbers only (no strings, no booleans)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except OverflowError:
        raise ValidationError(f"{field_name} must be a number") from None
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a number")
    return number


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
