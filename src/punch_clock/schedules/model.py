from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Schedule:
    """Domain entity: a user's expected working window for one date.

    Times are local ``HH:mm`` wall-clock strings.
    """

    schedule_id: str
    user_id: str
    work_date: date
    start_time: str
    end_time: str
    lunch_start: Optional[str] = None
    lunch_end: Optional[str] = None

    @property
    def has_lunch(self) -> bool:
        return bool(self.lunch_start and self.lunch_end)


@dataclass(frozen=True)
class BulkScheduleItem:
    user_id: str
    work_date: date
    start_time: str
    end_time: str
    lunch_start: Optional[str] = None
    lunch_end: Optional[str] = None
