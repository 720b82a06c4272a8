from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def optional_date_arg(value: Optional[str], field_name: str) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} must use the YYYY-MM-DD format") from None


def optional_int_arg(value: Optional[str], field_name: str) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be an integer") from None
