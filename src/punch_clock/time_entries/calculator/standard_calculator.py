from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.datetime_utils import minutes_between, time_to_minutes
from ...core.constants import DEFAULT_EXPECTED_MINUTES
from ...schedules.model import Schedule
from ..model import DayEntries
from .base import WorkingHoursCalculator


class StandardWorkingHoursCalculator(WorkingHoursCalculator):
    """Standard rule: time on the clock, minus the lunch break between LUNCH_OUT and LUNCH_IN.

    While the user is still at lunch, nothing after LUNCH_OUT counts.
    """

    def __init__(self, default_expected_minutes: int = DEFAULT_EXPECTED_MINUTES):
        self._default_expected = int(default_expected_minutes)

    def worked_minutes(self, day: DayEntries, *, now: datetime) -> float:
        if not day.check_in:
            return 0.0

        work_end = day.check_out or now

        if not day.lunch_out:
            return max(0.0, minutes_between(day.check_in, work_end))

        worked = max(0.0, minutes_between(day.check_in, day.lunch_out))
        if day.lunch_in:
            worked += max(0.0, minutes_between(day.lunch_in, work_end))
        return worked

    def expected_minutes(self, schedule: Optional[Schedule]) -> int:
        if not schedule:
            return self._default_expected

        expected = time_to_minutes(schedule.end_time) - time_to_minutes(schedule.start_time)
        if schedule.has_lunch:
            expected -= time_to_minutes(schedule.lunch_end) - time_to_minutes(schedule.lunch_start)
        return expected
