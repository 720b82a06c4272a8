from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, Optional, Sequence

from ..common.validators import optional_hhmm, require_hhmm, require_non_empty
from ..core.constants import DEFAULT_SCHEDULE
from ..core.exceptions import DuplicateScheduleError, NotFoundError, UnknownUserError, ValidationError
from ..users.repository import UserRepository
from .model import BulkScheduleItem, Schedule
from .repository import ScheduleRepository
from .validator import validate_schedule_window

logger = logging.getLogger(__name__)

_PATCH_FIELDS = ("start_time", "end_time", "lunch_start", "lunch_end")


class ScheduleService:
    def __init__(self, schedules: ScheduleRepository, users: UserRepository):
        self._schedules = schedules
        self._users = users

    def validate(
        self,
        start_time: str,
        end_time: str,
        lunch_start: Optional[str] = None,
        lunch_end: Optional[str] = None,
    ) -> tuple[str, str, Optional[str], Optional[str]]:
        """Check format then window rules; returns the normalized fields."""

        start_time = require_hhmm(start_time, "start_time")
        end_time = require_hhmm(end_time, "end_time")
        lunch_start = optional_hhmm(lunch_start, "lunch_start")
        lunch_end = optional_hhmm(lunch_end, "lunch_end")

        validate_schedule_window(start_time, end_time, lunch_start, lunch_end)
        return start_time, end_time, lunch_start, lunch_end

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
        user_id = require_non_empty(user_id, "user_id")
        start_time, end_time, lunch_start, lunch_end = self.validate(start_time, end_time, lunch_start, lunch_end)

        if self._schedules.get_for_user_and_date(user_id=user_id, work_date=work_date):
            raise DuplicateScheduleError("A schedule already exists for this date")

        schedule = self._schedules.create(
            user_id=user_id,
            work_date=work_date,
            start_time=start_time,
            end_time=end_time,
            lunch_start=lunch_start,
            lunch_end=lunch_end,
        )
        logger.info("Created schedule %s for user %s on %s", schedule.schedule_id, user_id, work_date)
        return schedule

    def get(self, schedule_id: str) -> Schedule:
        schedule = self._schedules.get_by_id(schedule_id)
        if not schedule:
            raise NotFoundError("Schedule not found")
        return schedule

    def list_for_user(self, user_id: str, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[Schedule]:
        return self._schedules.list_range(start=start, end=end, user_id=user_id)

    def list_all(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[Schedule]:
        return self._schedules.list_range(start=start, end=end)

    def update(self, schedule_id: str, patch: Mapping[str, Optional[str]]) -> Schedule:
        unknown = set(patch) - set(_PATCH_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown schedule fields: {', '.join(sorted(unknown))}")

        current = self.get(schedule_id)
        if not patch:
            return current

        # start/end cannot be cleared; lunch fields can.
        merged = {
            "start_time": patch.get("start_time") or current.start_time,
            "end_time": patch.get("end_time") or current.end_time,
            "lunch_start": patch["lunch_start"] if "lunch_start" in patch else current.lunch_start,
            "lunch_end": patch["lunch_end"] if "lunch_end" in patch else current.lunch_end,
        }
        start_time, end_time, lunch_start, lunch_end = self.validate(**merged)

        self._schedules.update_times(
            schedule_id=current.schedule_id,
            start_time=start_time,
            end_time=end_time,
            lunch_start=lunch_start,
            lunch_end=lunch_end,
        )
        logger.info("Updated schedule %s", current.schedule_id)
        return self.get(current.schedule_id)

    def remove(self, schedule_id: str) -> None:
        schedule = self.get(schedule_id)
        if not self._schedules.delete(schedule_id=schedule.schedule_id):
            raise NotFoundError("Schedule not found")
        logger.info("Removed schedule %s", schedule.schedule_id)

    def bulk_create(self, items: Sequence[BulkScheduleItem]) -> list[Schedule]:
        """Create many schedules at once.

        Unknown users fail the whole batch before anything is written. Items
        whose (user, date) already has a schedule are skipped, including a
        repeat of an earlier item in the same batch.
        """

        user_ids = list(dict.fromkeys(str(item.user_id) for item in items))
        found = {u.user_id for u in self._users.find_by_ids(user_ids)}
        missing = [uid for uid in user_ids if uid not in found]
        if missing:
            raise UnknownUserError(f"Unknown users: {', '.join(missing)}")

        normalized = [(item, self.validate(item.start_time, item.end_time, item.lunch_start, item.lunch_end)) for item in items]

        created: list[Schedule] = []
        for item, (start_time, end_time, lunch_start, lunch_end) in normalized:
            if self._schedules.get_for_user_and_date(user_id=str(item.user_id), work_date=item.work_date):
                logger.debug("Skipping existing schedule for user %s on %s", item.user_id, item.work_date)
                continue

            created.append(
                self._schedules.create(
                    user_id=str(item.user_id),
                    work_date=item.work_date,
                    start_time=start_time,
                    end_time=end_time,
                    lunch_start=lunch_start,
                    lunch_end=lunch_end,
                )
            )

        logger.info("Bulk schedule run created %d of %d items", len(created), len(items))
        return created

    def default_schedule(self) -> dict:
        return dict(DEFAULT_SCHEDULE)
