from __future__ import annotations

from datetime import timedelta
from itertools import product

import pytest

from punch_clock.core.enums import TimeEntryType
from punch_clock.core.exceptions import DayAlreadyFinishedError, SequenceViolationError
from punch_clock.time_entries import transitions
from punch_clock.time_entries.transitions import allowed_next, check_transition

IN = TimeEntryType.IN
LUNCH_OUT = TimeEntryType.LUNCH_OUT
LUNCH_IN = TimeEntryType.LUNCH_IN
OUT = TimeEntryType.OUT

EXPECTED_ALLOWED = {
    IN: {LUNCH_OUT, OUT},
    LUNCH_OUT: {LUNCH_IN},
    LUNCH_IN: {LUNCH_OUT, OUT},
    OUT: set(),
}


@pytest.mark.parametrize("requested", list(TimeEntryType))
def test_first_punch_of_day_must_be_in(requested):
    if requested == IN:
        check_transition(None, requested)
    else:
        with pytest.raises(SequenceViolationError, match="first punch of the day must be IN"):
            check_transition(None, requested)


@pytest.mark.parametrize("last,requested", list(product(TimeEntryType, TimeEntryType)))
def test_every_transition_pair(last, requested):
    if last == OUT:
        with pytest.raises(DayAlreadyFinishedError):
            check_transition(last, requested)
    elif requested in EXPECTED_ALLOWED[last]:
        check_transition(last, requested)
    else:
        with pytest.raises(SequenceViolationError, match=f"{last.value} -> {requested.value}"):
            check_transition(last, requested)


def test_allowed_next_matches_table():
    assert allowed_next(None) == {IN}
    for last, expected in EXPECTED_ALLOWED.items():
        assert allowed_next(last) == expected


def test_day_already_finished_is_not_a_sequence_violation():
    assert not issubclass(DayAlreadyFinishedError, SequenceViolationError)


def test_check_transition_follows_allowed_next(monkeypatch):
    monkeypatch.setattr(transitions, "allowed_next", lambda last: frozenset({OUT}))

    check_transition(None, OUT)
    with pytest.raises(SequenceViolationError, match="first punch of the day must be IN"):
        check_transition(None, IN)
    with pytest.raises(SequenceViolationError, match="IN -> LUNCH_OUT"):
        check_transition(IN, LUNCH_OUT)


# Service-level: the same rules applied through record_punch against stored entries.


def _seed_walk(entries, clock, walk):
    t = clock.now.replace(hour=7, minute=0)
    for entry_type in walk:
        entries.seed("alice", entry_type, t)
        t += timedelta(minutes=30)


@pytest.mark.parametrize("requested", list(TimeEntryType))
def test_record_punch_on_empty_day(time_entry_service, entries, requested):
    if requested == IN:
        assert time_entry_service.record_punch("alice", requested).entry_type == IN
    else:
        with pytest.raises(SequenceViolationError):
            time_entry_service.record_punch("alice", requested)
        assert entries.entries == []


@pytest.mark.parametrize("requested", list(TimeEntryType))
def test_record_punch_after_out_always_fails(time_entry_service, entries, clock, requested):
    _seed_walk(entries, clock, [IN, LUNCH_OUT, LUNCH_IN, OUT])

    with pytest.raises(DayAlreadyFinishedError):
        time_entry_service.record_punch("alice", requested)
    assert len(entries.entries) == 4


def test_multiple_lunch_breaks_are_allowed(time_entry_service, entries, clock):
    _seed_walk(entries, clock, [IN, LUNCH_OUT, LUNCH_IN])

    time_entry_service.record_punch("alice", LUNCH_OUT)
    clock.now += timedelta(minutes=5)
    time_entry_service.record_punch("alice", LUNCH_IN)
    clock.now += timedelta(minutes=5)
    time_entry_service.record_punch("alice", OUT)

    assert [e.entry_type for e in entries.entries][-3:] == [LUNCH_OUT, LUNCH_IN, OUT]


def test_yesterdays_out_does_not_block_today(time_entry_service, entries, clock):
    yesterday = clock.now - timedelta(days=1)
    entries.seed("alice", IN, yesterday.replace(hour=8))
    entries.seed("alice", OUT, yesterday.replace(hour=17))

    entry = time_entry_service.record_punch("alice", IN)

    assert entry.timestamp == clock.now


def test_other_users_entries_do_not_affect_sequence(time_entry_service, entries, clock):
    entries.seed("bob", IN, clock.now.replace(hour=7))

    with pytest.raises(SequenceViolationError):
        time_entry_service.record_punch("alice", OUT)
