from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization on administrative routes."""

    USER = "user"
    MANAGER = "manager"
    ADMIN = "admin"


class TimeEntryType(str, Enum):
    """Punch kinds, in the order a normal working day records them."""

    IN = "IN"
    LUNCH_OUT = "LUNCH_OUT"
    LUNCH_IN = "LUNCH_IN"
    OUT = "OUT"


class DayStatus(str, Enum):
    """Coarse status of a user's day, derived from today's punches."""

    NOT_STARTED = "not_started"
    WORKING = "working"
    LUNCH = "lunch"
    FINISHED = "finished"
