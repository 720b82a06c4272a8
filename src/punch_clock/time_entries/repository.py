from __future__ import annotations

from datetime import date, datetime
from typing import ContextManager, Optional, Protocol, Sequence

from ..core.enums import TimeEntryType
from .model import TimeEntry


class TimeEntryRepository(Protocol):
    def lock_day(self, *, user_id: str, work_date: date) -> ContextManager[None]:
        """Serialize punches for one user and day.

        Raises PunchConflictError when the lock cannot be taken.
        """

        raise NotImplementedError

    def list_between(self, *, user_id: str, start: datetime, end: datetime) -> Sequence[TimeEntry]:
        """Entries with start <= timestamp < end, oldest first."""

        raise NotImplementedError

    def create(
        self,
        *,
        user_id: str,
        entry_type: TimeEntryType,
        timestamp: datetime,
        day_seq: int,
    ) -> TimeEntry:
        """Append a punch as the ``day_seq``-th entry of its day.

        Raises PunchConflictError when that slot is already taken.
        """

        raise NotImplementedError

    def find_page(
        self,
        *,
        start: datetime,
        end: datetime,
        user_id: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[Sequence[TimeEntry], int]:
        """Newest-first slice of entries with start <= timestamp < end, plus the total count."""

        raise NotImplementedError
