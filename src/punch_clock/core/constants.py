"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_EXPECTED_MINUTES = 480
DEFAULT_HISTORY_DAYS = 7
DEFAULT_HISTORY_PAGE_SIZE = 10
DEFAULT_PUNCH_LOCK_TIMEOUT = 5

DEFAULT_SCHEDULE = {
    "start_time": "08:00",
    "end_time": "17:00",
    "lunch_start": "12:00",
    "lunch_end": "13:00",
}
