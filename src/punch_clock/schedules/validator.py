from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import time_to_minutes
from ..core.exceptions import InvalidWindowError


def validate_schedule_window(
    start_time: str,
    end_time: str,
    lunch_start: Optional[str] = None,
    lunch_end: Optional[str] = None,
) -> None:
    """Check a working window for internal consistency.

    Works purely in minutes since midnight; format checking is the caller's job.
    A window that crosses midnight (end before start) is rejected.
    """

    start = time_to_minutes(start_time)
    end = time_to_minutes(end_time)

    if start >= end:
        raise InvalidWindowError("Start time must be before end time")

    if lunch_start and lunch_end:
        lunch_from = time_to_minutes(lunch_start)
        lunch_to = time_to_minutes(lunch_end)

        if lunch_from >= lunch_to:
            raise InvalidWindowError("Lunch start must be before lunch end")

        if lunch_from <= start or lunch_to >= end:
            raise InvalidWindowError("Lunch break must fall inside the working window")
