from __future__ import annotations

import uuid
from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterator, Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.constants import DEFAULT_PUNCH_LOCK_TIMEOUT
from ..core.enums import TimeEntryType
from ..core.exceptions import PunchConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, named_lock
from .model import TimeEntry
from .repository import TimeEntryRepository


class MySQLTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, lock_timeout: int = DEFAULT_PUNCH_LOCK_TIMEOUT):
        self._conn_factory = conn_factory
        self._lock_timeout = int(lock_timeout)

    @staticmethod
    def _to_entry(r: dict) -> TimeEntry:
        return TimeEntry(
            entry_id=str(r["entry_id"]),
            user_id=str(r["user_id"]),
            entry_type=TimeEntryType(r["entry_type"]),
            timestamp=r["entry_timestamp"],
        )

    @contextmanager
    def lock_day(self, *, user_id: str, work_date: date) -> Iterator[None]:
        name = f"punch:{user_id}:{work_date.isoformat()}"
        with named_lock(self._conn_factory, name, timeout=self._lock_timeout) as acquired:
            if not acquired:
                raise PunchConflictError("Another punch is being recorded, please try again")
            yield

    def list_between(self, *, user_id: str, start: datetime, end: datetime) -> Sequence[TimeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT entry_id, user_id, entry_type, entry_timestamp
                FROM time_entries
                WHERE user_id=%s AND entry_timestamp >= %s AND entry_timestamp < %s
                ORDER BY entry_timestamp ASC, day_seq ASC, entry_id ASC
                """,
                (str(user_id), start, end),
            )
            return [self._to_entry(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        user_id: str,
        entry_type: TimeEntryType,
        timestamp: datetime,
        day_seq: int,
    ) -> TimeEntry:
        entry = TimeEntry(
            entry_id=str(uuid.uuid4()),
            user_id=str(user_id),
            entry_type=entry_type,
            timestamp=timestamp,
        )
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO time_entries(entry_id, user_id, entry_type, entry_timestamp, work_date, day_seq)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (entry.entry_id, entry.user_id, entry_type.value, timestamp, entry.work_date, int(day_seq)),
                )
        except IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise PunchConflictError("Another punch was recorded at the same time, please try again") from e
            raise
        return entry

    def find_page(
        self,
        *,
        start: datetime,
        end: datetime,
        user_id: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[Sequence[TimeEntry], int]:
        clauses = ["entry_timestamp >= %s", "entry_timestamp < %s"]
        params: list[object] = [start, end]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(str(user_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM time_entries WHERE {where}", tuple(params))
            r = fetchone(cur)
            total = int(r["total"]) if r else 0

            cur.execute(
                f"""
                SELECT entry_id, user_id, entry_type, entry_timestamp
                FROM time_entries
                WHERE {where}
                ORDER BY entry_timestamp DESC, day_seq DESC, entry_id DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params) + (int(limit), int(offset)),
            )
            return [self._to_entry(r) for r in fetchall(cur)], total
