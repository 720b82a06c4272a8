from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional

from ..core.enums import DayStatus, TimeEntryType


@dataclass(frozen=True)
class TimeEntry:
    """Domain entity: one punch. Append-only, stamped with server time."""

    entry_id: str
    user_id: str
    entry_type: TimeEntryType
    timestamp: datetime

    @property
    def work_date(self) -> date:
        return self.timestamp.date()


@dataclass(frozen=True)
class DayEntries:
    """The day's punches, at most one timestamp per punch type."""

    check_in: Optional[datetime] = None
    lunch_out: Optional[datetime] = None
    lunch_in: Optional[datetime] = None
    check_out: Optional[datetime] = None

    @classmethod
    def from_entries(cls, entries: Iterable[TimeEntry]) -> "DayEntries":
        field_for = {
            TimeEntryType.IN: "check_in",
            TimeEntryType.LUNCH_OUT: "lunch_out",
            TimeEntryType.LUNCH_IN: "lunch_in",
            TimeEntryType.OUT: "check_out",
        }
        found: dict[str, datetime] = {}
        for entry in entries:
            # First occurrence wins.
            found.setdefault(field_for[entry.entry_type], entry.timestamp)
        return cls(**found)

    @property
    def status(self) -> DayStatus:
        if not self.check_in:
            return DayStatus.NOT_STARTED
        if self.check_out:
            return DayStatus.FINISHED
        if self.lunch_out and not self.lunch_in:
            return DayStatus.LUNCH
        return DayStatus.WORKING


@dataclass(frozen=True)
class WorkingHours:
    """Minutes worked, still to work, and expected for the day."""

    worked: int
    remaining: int
    expected_total: int


@dataclass(frozen=True)
class DashboardSnapshot:
    date: date
    entries: DayEntries
    working_hours: WorkingHours
    status: DayStatus


@dataclass(frozen=True)
class HistoryGroup:
    date: date
    entries: list[TimeEntry] = field(default_factory=list)


@dataclass(frozen=True)
class Pagination:
    page: int
    page_size: int
    total: int
    total_pages: int


@dataclass(frozen=True)
class HistoryPage:
    groups: list[HistoryGroup]
    pagination: Pagination
