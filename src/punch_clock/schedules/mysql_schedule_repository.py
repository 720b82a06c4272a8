from __future__ import annotations

import uuid
from datetime import date
from typing import Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.exceptions import DuplicateScheduleError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, format_mysql_time
from .model import Schedule
from .repository import ScheduleRepository

_COLUMNS = "schedule_id, user_id, work_date, start_time, end_time, lunch_start, lunch_end"


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_schedule(r: dict) -> Schedule:
        return Schedule(
            schedule_id=str(r["schedule_id"]),
            user_id=str(r["user_id"]),
            work_date=r["work_date"],
            start_time=format_mysql_time(r["start_time"]),
            end_time=format_mysql_time(r["end_time"]),
            lunch_start=format_mysql_time(r.get("lunch_start")),
            lunch_end=format_mysql_time(r.get("lunch_end")),
        )

    def get_by_id(self, schedule_id: str) -> Optional[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM schedules WHERE schedule_id=%s", (str(schedule_id),))
            r = fetchone(cur)
            return self._to_schedule(r) if r else None

    def get_for_user_and_date(self, *, user_id: str, work_date: date) -> Optional[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM schedules WHERE user_id=%s AND work_date=%s",
                (str(user_id), work_date),
            )
            r = fetchone(cur)
            return self._to_schedule(r) if r else None

    def create(
        self,
        *,
        user_id: str,
        work_date: date,
        start_time: str,
        end_time: str,
        lunch_start: Optional[str] = None,
        lunch_end: Optional[str] = None,
    ) -> Schedule:
        schedule = Schedule(
            schedule_id=str(uuid.uuid4()),
            user_id=str(user_id),
            work_date=work_date,
            start_time=start_time,
            end_time=end_time,
            lunch_start=lunch_start,
            lunch_end=lunch_end,
        )
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    INSERT INTO schedules({_COLUMNS})
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        schedule.schedule_id,
                        schedule.user_id,
                        schedule.work_date,
                        schedule.start_time,
                        schedule.end_time,
                        schedule.lunch_start,
                        schedule.lunch_end,
                    ),
                )
        except IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise DuplicateScheduleError("A schedule already exists for this date") from e
            raise
        return schedule

    def update_times(
        self,
        *,
        schedule_id: str,
        start_time: str,
        end_time: str,
        lunch_start: Optional[str],
        lunch_end: Optional[str],
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE schedules
                SET start_time=%s, end_time=%s, lunch_start=%s, lunch_end=%s
                WHERE schedule_id=%s
                """,
                (start_time, end_time, lunch_start, lunch_end, str(schedule_id)),
            )

    def delete(self, *, schedule_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM schedules WHERE schedule_id=%s", (str(schedule_id),))
            return cur.rowcount > 0

    def list_range(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        user_id: Optional[str] = None,
    ) -> Sequence[Schedule]:
        clauses: list[str] = []
        params: list[object] = []
        if start is not None and end is not None:
            clauses.append("work_date BETWEEN %s AND %s")
            params.extend([start, end])
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(str(user_id))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM schedules
                {where}
                ORDER BY work_date DESC, created_at DESC
                """,
                tuple(params),
            )
            return [self._to_schedule(r) for r in fetchall(cur)]
