from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause, normalize_mysql_time
from .model import Exemption
from .repository import ExemptionRepository


class MySQLExemptionRepository(ExemptionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for(self, *, user_ids: Iterable[int], dates: Iterable[date]) -> Sequence[Exemption]:
        ids = sorted({int(u) for u in user_ids})
        days = sorted(set(dates))
        if not ids or not days:
            return []

        id_placeholders, id_params = in_clause(ids)
        date_placeholders, date_params = in_clause(days)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, user_id, exemption_date, request_type, start_time, end_time, reason
                FROM schedule_exemptions
                WHERE user_id IN ({id_placeholders}) AND exemption_date IN ({date_placeholders})
                """,
                id_params + date_params,
            )
            rows = fetchall(cur)
            return [
                Exemption(
                    exemption_id=int(r["id"]),
                    user_id=int(r["user_id"]),
                    exemption_date=r["exemption_date"],
                    request_type=r["request_type"],
                    start_time=normalize_mysql_time(r.get("start_time")),
                    end_time=normalize_mysql_time(r.get("end_time")),
                    reason=r.get("reason"),
                )
                for r in rows
            ]
