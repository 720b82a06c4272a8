from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Schedule


class ScheduleRepository(Protocol):
    def get_by_id(self, schedule_id: str) -> Optional[Schedule]:
        raise NotImplementedError

    def get_for_user_and_date(self, *, user_id: str, work_date: date) -> Optional[Schedule]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: str,
        work_date: date,
        start_time: str,
        end_time: str,
        lunch_start: Optional[str] = None,
        lunch_end: Optional[str] = None,
    ) -> Schedule:
        """Insert a schedule.

        Raises DuplicateScheduleError when (user_id, work_date) is taken.
        """

        raise NotImplementedError

    def update_times(
        self,
        *,
        schedule_id: str,
        start_time: str,
        end_time: str,
        lunch_start: Optional[str],
        lunch_end: Optional[str],
    ) -> None:
        raise NotImplementedError

    def delete(self, *, schedule_id: str) -> bool:
        raise NotImplementedError

    def list_range(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        user_id: Optional[str] = None,
    ) -> Sequence[Schedule]:
        """List schedules, newest date first. Date filter applies only when both bounds are set."""

        raise NotImplementedError
