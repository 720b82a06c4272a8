from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_HISTORY_PAGE_SIZE, DEFAULT_PUNCH_LOCK_TIMEOUT
from .database.connection import DBConfig, DatabaseConnection
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService
from .time_entries.mysql_time_entry_repository import MySQLTimeEntryRepository
from .time_entries.repository import TimeEntryRepository
from .time_entries.service import TimeEntryService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    schedules_repo: ScheduleRepository
    time_entries_repo: TimeEntryRepository

    schedule_service: ScheduleService
    time_entry_service: TimeEntryService

    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    users_repo: UserRepository,
    schedules_repo: ScheduleRepository,
    time_entries_repo: TimeEntryRepository,
    history_page_size: int = DEFAULT_HISTORY_PAGE_SIZE,
    conn: Optional[DatabaseConnection] = None,
    **time_entry_options,
) -> Container:
    schedule_service = ScheduleService(schedules_repo, users_repo)
    time_entry_service = TimeEntryService(
        time_entries_repo,
        schedules_repo,
        history_page_size=history_page_size,
        **time_entry_options,
    )
    return Container(
        users_repo=users_repo,
        schedules_repo=schedules_repo,
        time_entries_repo=time_entries_repo,
        schedule_service=schedule_service,
        time_entry_service=time_entry_service,
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    lock_timeout: int = DEFAULT_PUNCH_LOCK_TIMEOUT,
    history_page_size: int = DEFAULT_HISTORY_PAGE_SIZE,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return build_services(
        users_repo=MySQLUserRepository(conn),
        schedules_repo=MySQLScheduleRepository(conn),
        time_entries_repo=MySQLTimeEntryRepository(conn, lock_timeout=lock_timeout),
        history_page_size=history_page_size,
        conn=conn,
    )
