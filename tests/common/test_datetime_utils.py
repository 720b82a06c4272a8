from __future__ import annotations

from datetime import date, datetime

from punch_clock.common.datetime_utils import day_bounds, time_to_minutes, truncate_to_millis


def test_truncate_to_millis_never_rounds_up():
    value = datetime(2026, 2, 2, 23, 59, 59, 999999)

    assert truncate_to_millis(value) == datetime(2026, 2, 2, 23, 59, 59, 999000)


def test_truncate_to_millis_keeps_whole_milliseconds():
    value = datetime(2026, 2, 2, 9, 0, 0, 123000)

    assert truncate_to_millis(value) == value


def test_day_bounds_is_half_open():
    start, end = day_bounds(date(2026, 2, 2))

    assert start == datetime(2026, 2, 2)
    assert end == datetime(2026, 2, 3)


def test_time_to_minutes_ignores_seconds():
    assert time_to_minutes("08:30:15") == 510
