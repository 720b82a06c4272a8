from __future__ import annotations

from datetime import date, datetime, time, timedelta


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: This is the only clock punches are stamped with. Services take it
    as an injectable callable so tests can freeze time.
    """
    return datetime.now()


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Local midnight of ``day`` and of the following day (half-open range)."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def time_to_minutes(value: str) -> int:
    """Convert an ``HH:mm`` wall-clock string into minutes since midnight."""
    hours, minutes = value.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def minutes_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision so the value matches what DATETIME(3) stores."""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)
