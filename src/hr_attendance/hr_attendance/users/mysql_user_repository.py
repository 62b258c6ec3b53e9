from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .model import User
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_by_roles(self, roles: Sequence[str]) -> Sequence[User]:
        if not roles:
            return []
        placeholders, params = in_clause([str(r) for r in roles])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, name, role, email
                FROM users
                WHERE role IN ({placeholders})
                ORDER BY id
                """,
                params,
            )
            rows = fetchall(cur)
            return [
                User(
                    user_id=int(r["id"]),
                    name=r["name"],
                    role=r["role"],
                    email=r.get("email"),
                )
                for r in rows
            ]
