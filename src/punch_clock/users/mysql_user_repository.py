from __future__ import annotations

from typing import Iterable, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import User
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_user(row: dict) -> User:
        return User(
            user_id=str(row["user_id"]),
            name=row["name"],
            email=row["email"],
            role=Role(row["role"]),
        )

    def find_by_ids(self, user_ids: Iterable[str]) -> Sequence[User]:
        ids = [str(i) for i in user_ids]
        if not ids:
            return []

        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT user_id, name, email, role FROM users WHERE user_id IN ({placeholders})",
                tuple(ids),
            )
            return [self._to_user(r) for r in fetchall(cur)]
