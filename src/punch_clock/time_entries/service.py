from __future__ import annotations

import logging
import math
from datetime import date, datetime, timedelta
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import day_bounds, now_local, truncate_to_millis
from ..common.validators import require_min_value, require_non_empty
from ..core.constants import DEFAULT_HISTORY_DAYS, DEFAULT_HISTORY_PAGE_SIZE
from ..core.enums import TimeEntryType
from ..core.exceptions import SequenceViolationError, ValidationError
from ..schedules.model import Schedule
from ..schedules.repository import ScheduleRepository
from .calculator.base import WorkingHoursCalculator
from .calculator.standard_calculator import StandardWorkingHoursCalculator
from .model import DashboardSnapshot, DayEntries, HistoryGroup, HistoryPage, Pagination, TimeEntry
from .repository import TimeEntryRepository
from .transitions import check_transition

logger = logging.getLogger(__name__)


def build_dashboard(
    *,
    today: date,
    entries: Iterable[TimeEntry],
    schedule: Optional[Schedule],
    now: datetime,
    calculator: Optional[WorkingHoursCalculator] = None,
) -> DashboardSnapshot:
    """Derive today's snapshot from its punches and (optional) schedule. No I/O."""

    calculator = calculator or StandardWorkingHoursCalculator()
    day = DayEntries.from_entries(entries)
    return DashboardSnapshot(
        date=today,
        entries=day,
        working_hours=calculator.summarize(day, schedule, now=now),
        status=day.status,
    )


def group_entries_by_date(entries: Iterable[TimeEntry]) -> list[HistoryGroup]:
    """Group entries by local calendar date, newest date first; entry order is kept."""

    grouped: dict[date, list[TimeEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.work_date, []).append(entry)
    return [HistoryGroup(date=d, entries=grouped[d]) for d in sorted(grouped, reverse=True)]


class TimeEntryService:
    """Use cases around punches: record, today's dashboard, history.

    Stateless between calls; everything is read fresh from the repositories.
    """

    def __init__(
        self,
        entries: TimeEntryRepository,
        schedules: ScheduleRepository,
        *,
        calculator: Optional[WorkingHoursCalculator] = None,
        clock: Callable[[], datetime] = now_local,
        history_page_size: int = DEFAULT_HISTORY_PAGE_SIZE,
    ):
        self._entries = entries
        self._schedules = schedules
        self._calculator = calculator or StandardWorkingHoursCalculator()
        self._clock = clock
        self._history_page_size = int(history_page_size)

    def record_punch(self, user_id: str, entry_type: TimeEntryType | str) -> TimeEntry:
        user_id = require_non_empty(user_id, "user_id")
        try:
            entry_type = TimeEntryType(entry_type)
        except ValueError:
            raise ValidationError(f"Unknown punch type: {entry_type}") from None

        today = self._clock().date()
        start, end = day_bounds(today)

        with self._entries.lock_day(user_id=user_id, work_date=today):
            todays = self._entries.list_between(user_id=user_id, start=start, end=end)
            last = todays[-1].entry_type if todays else None
            try:
                check_transition(last, entry_type)
            except SequenceViolationError as e:
                logger.info("Rejected punch for user %s: %s", user_id, e)
                raise

            now = truncate_to_millis(self._clock())
            if now.date() != today:
                # Crossed midnight while waiting on the lock; the day's sequence no longer applies.
                raise SequenceViolationError("The day changed while recording the punch, please try again")

            entry = self._entries.create(
                user_id=user_id,
                entry_type=entry_type,
                timestamp=now,
                day_seq=len(todays) + 1,
            )

        logger.info("Recorded %s for user %s at %s", entry.entry_type.value, user_id, entry.timestamp.isoformat())
        return entry

    def compute_dashboard(self, user_id: str) -> DashboardSnapshot:
        now = self._clock()
        today = now.date()
        start, end = day_bounds(today)

        entries = self._entries.list_between(user_id=user_id, start=start, end=end)
        schedule = self._schedules.get_for_user_and_date(user_id=user_id, work_date=today)
        return build_dashboard(today=today, entries=entries, schedule=schedule, now=now, calculator=self._calculator)

    def list_history(
        self,
        user_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> HistoryPage:
        user_id = require_non_empty(user_id, "user_id")
        return self._history(user_id, start_date=start_date, end_date=end_date, page=page, page_size=page_size)

    def list_admin_history(
        self,
        *,
        user_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> HistoryPage:
        return self._history(user_id or None, start_date=start_date, end_date=end_date, page=page, page_size=page_size)

    def _history(
        self,
        user_id: Optional[str],
        *,
        start_date: Optional[date],
        end_date: Optional[date],
        page: int,
        page_size: Optional[int],
    ) -> HistoryPage:
        page = require_min_value(page, "page", 1)
        page_size = require_min_value(self._history_page_size if page_size is None else page_size, "page_size", 1)

        today = self._clock().date()
        start_date = start_date or today - timedelta(days=DEFAULT_HISTORY_DAYS)
        end_date = end_date or today
        if end_date < start_date:
            raise ValidationError("end_date must not be before start_date")

        start, _ = day_bounds(start_date)
        _, end = day_bounds(end_date)

        entries, total = self._entries.find_page(
            start=start,
            end=end,
            user_id=user_id,
            offset=(page - 1) * page_size,
            limit=page_size,
        )
        return HistoryPage(
            groups=group_entries_by_date(entries),
            pagination=Pagination(
                page=page,
                page_size=page_size,
                total=total,
                total_pages=math.ceil(total / page_size),
            ),
        )
