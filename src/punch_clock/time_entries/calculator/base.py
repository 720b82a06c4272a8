from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ...schedules.model import Schedule
from ..model import DayEntries, WorkingHours


class WorkingHoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for daily working hours)."""

    @abstractmethod
    def worked_minutes(self, day: DayEntries, *, now: datetime) -> float:
        raise NotImplementedError

    @abstractmethod
    def expected_minutes(self, schedule: Optional[Schedule]) -> int:
        raise NotImplementedError

    def summarize(self, day: DayEntries, schedule: Optional[Schedule], *, now: datetime) -> WorkingHours:
        worked = self.worked_minutes(day, now=now)
        expected = self.expected_minutes(schedule)
        remaining = max(0.0, expected - worked)
        return WorkingHours(
            worked=round_half_up(worked),
            remaining=round_half_up(remaining),
            expected_total=expected,
        )


def round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)
