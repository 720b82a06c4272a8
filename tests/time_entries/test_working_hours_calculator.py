from __future__ import annotations

from datetime import date, datetime

from punch_clock.core.enums import DayStatus, TimeEntryType
from punch_clock.schedules.model import Schedule
from punch_clock.time_entries.calculator.base import round_half_up
from punch_clock.time_entries.calculator.standard_calculator import StandardWorkingHoursCalculator
from punch_clock.time_entries.model import DayEntries, TimeEntry
from punch_clock.time_entries.service import build_dashboard

TODAY = date(2026, 2, 2)


def at(hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(2026, 2, 2, hour, minute, second)


def entry(entry_type: TimeEntryType, ts: datetime) -> TimeEntry:
    return TimeEntry(entry_id=f"{entry_type.value}-{ts:%H%M%S}", user_id="alice", entry_type=entry_type, timestamp=ts)


def schedule(start="08:00", end="17:00", lunch_start=None, lunch_end=None) -> Schedule:
    return Schedule(
        schedule_id="s1",
        user_id="alice",
        work_date=TODAY,
        start_time=start,
        end_time=end,
        lunch_start=lunch_start,
        lunch_end=lunch_end,
    )


def test_full_day_with_lunch():
    entries = [
        entry(TimeEntryType.IN, at(9)),
        entry(TimeEntryType.LUNCH_OUT, at(12)),
        entry(TimeEntryType.LUNCH_IN, at(13)),
        entry(TimeEntryType.OUT, at(18)),
    ]

    snapshot = build_dashboard(today=TODAY, entries=entries, schedule=None, now=at(20))

    assert snapshot.working_hours.worked == 480
    assert snapshot.working_hours.expected_total == 480
    assert snapshot.working_hours.remaining == 0
    assert snapshot.status == DayStatus.FINISHED
    assert snapshot.entries.check_out == at(18)


def test_in_progress_day_counts_until_now():
    snapshot = build_dashboard(
        today=TODAY,
        entries=[entry(TimeEntryType.IN, at(9))],
        schedule=None,
        now=at(11, 30),
    )

    assert snapshot.working_hours.worked == 150
    assert snapshot.working_hours.remaining == 330
    assert snapshot.status == DayStatus.WORKING


def test_at_lunch_counts_only_the_morning():
    snapshot = build_dashboard(
        today=TODAY,
        entries=[entry(TimeEntryType.IN, at(9)), entry(TimeEntryType.LUNCH_OUT, at(12))],
        schedule=None,
        now=at(12, 45),
    )

    assert snapshot.working_hours.worked == 180
    assert snapshot.status == DayStatus.LUNCH


def test_back_from_lunch_counts_afternoon_until_now():
    snapshot = build_dashboard(
        today=TODAY,
        entries=[
            entry(TimeEntryType.IN, at(9)),
            entry(TimeEntryType.LUNCH_OUT, at(12)),
            entry(TimeEntryType.LUNCH_IN, at(13)),
        ],
        schedule=None,
        now=at(14, 15),
    )

    assert snapshot.working_hours.worked == 255
    assert snapshot.status == DayStatus.WORKING


def test_not_started():
    snapshot = build_dashboard(today=TODAY, entries=[], schedule=None, now=at(10))

    assert snapshot.entries == DayEntries()
    assert snapshot.working_hours.worked == 0
    assert snapshot.working_hours.remaining == 480
    assert snapshot.status == DayStatus.NOT_STARTED


def test_expected_total_from_schedule_minus_lunch():
    calc = StandardWorkingHoursCalculator()

    assert calc.expected_minutes(schedule("08:00", "17:00", "12:00", "13:00")) == 480
    assert calc.expected_minutes(schedule("09:00", "15:30")) == 390
    assert calc.expected_minutes(None) == 480


def test_remaining_never_negative():
    snapshot = build_dashboard(
        today=TODAY,
        entries=[entry(TimeEntryType.IN, at(8)), entry(TimeEntryType.OUT, at(18))],
        schedule=schedule("09:00", "15:00"),
        now=at(19),
    )

    assert snapshot.working_hours.worked == 600
    assert snapshot.working_hours.expected_total == 360
    assert snapshot.working_hours.remaining == 0


def test_rounding_applies_only_to_final_values():
    # 0:00:30 before lunch + 0:00:30 after lunch = 1 minute, not 2 rounded halves.
    snapshot = build_dashboard(
        today=TODAY,
        entries=[
            entry(TimeEntryType.IN, at(9, 0, 0)),
            entry(TimeEntryType.LUNCH_OUT, at(9, 0, 30)),
            entry(TimeEntryType.LUNCH_IN, at(10, 0, 0)),
            entry(TimeEntryType.OUT, at(10, 0, 30)),
        ],
        schedule=None,
        now=at(11),
    )

    assert snapshot.working_hours.worked == 1
    assert snapshot.working_hours.remaining == 479


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    assert round_half_up(0) == 0


def test_first_occurrence_wins_for_duplicate_types():
    day = DayEntries.from_entries(
        [
            entry(TimeEntryType.IN, at(9)),
            entry(TimeEntryType.LUNCH_OUT, at(12)),
            entry(TimeEntryType.LUNCH_IN, at(13)),
            entry(TimeEntryType.LUNCH_OUT, at(15)),
            entry(TimeEntryType.LUNCH_IN, at(15, 30)),
        ]
    )

    assert day.lunch_out == at(12)
    assert day.lunch_in == at(13)


def test_negative_spans_are_clamped():
    day = DayEntries(check_in=at(10), check_out=at(9))

    assert StandardWorkingHoursCalculator().worked_minutes(day, now=at(11)) == 0


def test_custom_default_expected_minutes():
    calc = StandardWorkingHoursCalculator(default_expected_minutes=360)

    hours = calc.summarize(DayEntries(check_in=at(9)), None, now=at(10))

    assert (hours.worked, hours.remaining, hours.expected_total) == (60, 300, 360)
