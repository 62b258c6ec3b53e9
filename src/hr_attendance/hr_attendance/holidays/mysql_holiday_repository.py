from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .model import Holiday
from .repository import HolidayRepository


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active_on(self, dates: Iterable[date]) -> Sequence[Holiday]:
        unique = sorted(set(dates))
        if not unique:
            return []
        placeholders, params = in_clause(unique)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, date, title, is_active
                FROM holidays
                WHERE is_active = 1 AND date IN ({placeholders})
                """,
                params,
            )
            rows = fetchall(cur)
            return [
                Holiday(
                    holiday_id=int(r["id"]),
                    date=r["date"],
                    title=r["title"],
                    is_active=bool(r["is_active"]),
                )
                for r in rows
            ]
