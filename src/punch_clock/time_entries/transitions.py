from __future__ import annotations

from typing import Optional

from ..core.enums import TimeEntryType
from ..core.exceptions import DayAlreadyFinishedError, SequenceViolationError

# Last punch of the day -> punches allowed next. OUT closes the day; a new IN
# is only possible after the local day boundary.
ALLOWED_TRANSITIONS: dict[TimeEntryType, frozenset[TimeEntryType]] = {
    TimeEntryType.IN: frozenset({TimeEntryType.LUNCH_OUT, TimeEntryType.OUT}),
    TimeEntryType.LUNCH_OUT: frozenset({TimeEntryType.LUNCH_IN}),
    TimeEntryType.LUNCH_IN: frozenset({TimeEntryType.LUNCH_OUT, TimeEntryType.OUT}),
    TimeEntryType.OUT: frozenset(),
}

FIRST_OF_DAY = frozenset({TimeEntryType.IN})


def allowed_next(last: Optional[TimeEntryType]) -> frozenset[TimeEntryType]:
    if last is None:
        return FIRST_OF_DAY
    return ALLOWED_TRANSITIONS[last]


def check_transition(last: Optional[TimeEntryType], requested: TimeEntryType) -> None:
    """Raise if ``requested`` cannot follow ``last`` on the same day."""

    if last == TimeEntryType.OUT:
        raise DayAlreadyFinishedError("The working day has already been finished")

    if requested in allowed_next(last):
        return

    if last is None:
        raise SequenceViolationError("The first punch of the day must be IN")
    raise SequenceViolationError(f"Invalid transition: {last.value} -> {requested.value}")
