from __future__ import annotations

import re
from typing import Optional

from ..core.exceptions import ValidationError

_HHMM_RE = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_hhmm(value: str, field_name: str) -> str:
    value = require_non_empty(value if value is None else str(value), field_name)
    if not _HHMM_RE.match(value):
        raise ValidationError(f"{field_name} must use the HH:mm format")
    return value


def optional_hhmm(value: Optional[str], field_name: str) -> Optional[str]:
    if value is None or not str(value).strip():
        return None
    return require_hhmm(value, field_name)


def require_min_value(value: int, field_name: str, min_value: int) -> int:
    try:
        value = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None
    if value < min_value:
        raise ValidationError(f"{field_name} must be at least {min_value}")
    return value
