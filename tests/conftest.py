from __future__ import annotations

import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional

import pytest

from punch_clock.core.enums import Role, TimeEntryType
from punch_clock.core.exceptions import DuplicateScheduleError, PunchConflictError
from punch_clock.schedules.model import Schedule
from punch_clock.schedules.service import ScheduleService
from punch_clock.time_entries.model import TimeEntry
from punch_clock.time_entries.service import TimeEntryService
from punch_clock.users.model import User


@dataclass
class InMemoryUsers:
    users_by_id: dict[str, User] = field(default_factory=dict)

    def add(self, user_id: str, role: Role = Role.USER) -> User:
        user = User(user_id=user_id, name=user_id.title(), email=f"{user_id}@example.com", role=role)
        self.users_by_id[user_id] = user
        return user

    def find_by_ids(self, user_ids: Iterable[str]):
        return [self.users_by_id[i] for i in user_ids if i in self.users_by_id]


class InMemorySchedules:
    def __init__(self):
        self._by_id: dict[str, Schedule] = {}

    def get_by_id(self, schedule_id: str) -> Optional[Schedule]:
        return self._by_id.get(schedule_id)

    def get_for_user_and_date(self, *, user_id: str, work_date: date) -> Optional[Schedule]:
        for s in self._by_id.values():
            if s.user_id == user_id and s.work_date == work_date:
                return s
        return None

    def create(self, *, user_id, work_date, start_time, end_time, lunch_start=None, lunch_end=None) -> Schedule:
        if self.get_for_user_and_date(user_id=user_id, work_date=work_date):
            raise DuplicateScheduleError("A schedule already exists for this date")
        schedule = Schedule(
            schedule_id=str(uuid.uuid4()),
            user_id=user_id,
            work_date=work_date,
            start_time=start_time,
            end_time=end_time,
            lunch_start=lunch_start,
            lunch_end=lunch_end,
        )
        self._by_id[schedule.schedule_id] = schedule
        return schedule

    def update_times(self, *, schedule_id, start_time, end_time, lunch_start, lunch_end) -> None:
        s = self._by_id[schedule_id]
        self._by_id[schedule_id] = Schedule(
            schedule_id=s.schedule_id,
            user_id=s.user_id,
            work_date=s.work_date,
            start_time=start_time,
            end_time=end_time,
            lunch_start=lunch_start,
            lunch_end=lunch_end,
        )

    def delete(self, *, schedule_id: str) -> bool:
        return self._by_id.pop(schedule_id, None) is not None

    def list_range(self, *, start=None, end=None, user_id=None):
        items = list(self._by_id.values())
        if start is not None and end is not None:
            items = [s for s in items if start <= s.work_date <= end]
        if user_id is not None:
            items = [s for s in items if s.user_id == user_id]
        items.sort(key=lambda s: s.work_date, reverse=True)
        return items


class InMemoryTimeEntries:
    def __init__(self, *, read_delay: float = 0.0):
        self.entries: list[TimeEntry] = []
        self._slots: set[tuple[str, date, int]] = set()
        self._locks: dict[tuple[str, date], threading.Lock] = {}
        self._guard = threading.Lock()
        self._read_delay = read_delay
        self.events: list[str] = []

    def seed(self, user_id: str, entry_type: TimeEntryType, timestamp: datetime) -> TimeEntry:
        entry = TimeEntry(entry_id=str(uuid.uuid4()), user_id=user_id, entry_type=entry_type, timestamp=timestamp)
        self.entries.append(entry)
        return entry

    @contextmanager
    def lock_day(self, *, user_id: str, work_date: date):
        with self._guard:
            lock = self._locks.setdefault((user_id, work_date), threading.Lock())
        with lock:
            self.events.append("lock")
            try:
                yield
            finally:
                self.events.append("unlock")

    def list_between(self, *, user_id, start, end):
        self.events.append("read")
        if self._read_delay:
            threading.Event().wait(self._read_delay)
        items = [e for e in self.entries if e.user_id == user_id and start <= e.timestamp < end]
        return sorted(items, key=lambda e: e.timestamp)

    def create(self, *, user_id, entry_type, timestamp, day_seq) -> TimeEntry:
        slot = (user_id, timestamp.date(), day_seq)
        with self._guard:
            if slot in self._slots:
                raise PunchConflictError("Another punch was recorded at the same time, please try again")
            self._slots.add(slot)
        self.events.append("write")
        return self.seed(user_id, entry_type, timestamp)

    def find_page(self, *, start, end, user_id=None, offset=0, limit=10):
        items = [e for e in self.entries if start <= e.timestamp < end and (user_id is None or e.user_id == user_id)]
        items.sort(key=lambda e: e.timestamp, reverse=True)
        return items[offset : offset + limit], len(items)


class FrozenClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def users():
    repo = InMemoryUsers()
    repo.add("alice")
    repo.add("bob")
    return repo


@pytest.fixture
def schedules():
    return InMemorySchedules()


@pytest.fixture
def entries():
    return InMemoryTimeEntries()


@pytest.fixture
def clock():
    return FrozenClock(datetime(2026, 2, 2, 9, 0, 0))


@pytest.fixture
def schedule_service(schedules, users):
    return ScheduleService(schedules, users)


@pytest.fixture
def time_entry_service(entries, schedules, clock):
    return TimeEntryService(entries, schedules, clock=clock)
