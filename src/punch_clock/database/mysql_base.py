from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, Iterator, List, Optional

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def named_lock(conn_factory: DatabaseConnection, name: str, *, timeout: int) -> Iterator[bool]:
    """Hold a MySQL advisory lock (GET_LOCK) for the duration of the block.

    Yields True when the lock was acquired, False on timeout. The lock lives on
    its own connection, so other connections opened inside the block are
    serialized against every holder of the same name.
    """

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        try:
            cur.execute("SELECT GET_LOCK(%s, %s)", (name, int(timeout)))
            row = cur.fetchone()
            acquired = bool(row and row[0] == 1)
            if not acquired:
                logger.warning("Timed out waiting for lock %s", name)
            try:
                yield acquired
            finally:
                if acquired:
                    cur.execute("SELECT RELEASE_LOCK(%s)", (name,))
                    cur.fetchone()
        finally:
            cur.close()
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def format_mysql_time(value: Any) -> Optional[str]:
    """Normalize MySQL TIME values into ``HH:mm`` strings.

    mysql-connector can return TIME as:
    - datetime.timedelta
    - datetime.time
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        return f"{total_seconds // 3600:02d}:{(total_seconds % 3600) // 60:02d}"

    if isinstance(value, time):
        return value.strftime("%H:%M")

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        return f"{int(parts[0]):02d}:{int(parts[1]):02d}"

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
