from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Session
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_optional_bool, db_cursor, fetchall, raw_timestamp
from .model import AttendanceRecord, NewAbsenceRow, PersistedId
from .repository import AttendanceRepository


def _session_or_none(value) -> Optional[Session]:
    try:
        return Session(value) if value else None
    except ValueError:
        return None


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_with_users(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    a.id, a.user_id, a.att_date, a.time_in, a.time_out,
                    a.attendance, a.session, a.notes,
                    u.name AS user_name, u.role
                FROM attendance a
                JOIN users u ON u.id = a.user_id
                ORDER BY a.att_date DESC, a.id DESC
                """
            )
            rows = fetchall(cur)
            return [
                AttendanceRecord(
                    identity=PersistedId(int(r["id"])),
                    user_id=int(r["user_id"]),
                    att_date=r["att_date"],
                    time_in=raw_timestamp(r.get("time_in")),
                    time_out=raw_timestamp(r.get("time_out")),
                    explicit_present=as_optional_bool(r.get("attendance")),
                    session=_session_or_none(r.get("session")),
                    notes=r.get("notes"),
                    user_name=r.get("user_name"),
                    role=r.get("role"),
                )
                for r in rows
            ]

    def insert_absence(self, row: NewAbsenceRow) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(
                    user_id, att_date, time_in, time_out, attendance, status,
                    late_minutes, overtime_minutes, penalty_amount, notes
                )
                VALUES(%s, %s, NULL, NULL, 0, %s, %s, %s, %s, %s)
                """,
                (
                    int(row.user_id),
                    row.att_date,
                    int(row.status),
                    int(row.late_minutes),
                    int(row.overtime_minutes),
                    row.penalty_amount,
                    row.notes,
                ),
            )
            return int(cur.lastrowid)

    def delete(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE id=%s", (int(attendance_id),))
            return cur.rowcount > 0
