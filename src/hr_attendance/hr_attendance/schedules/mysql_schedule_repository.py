from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, raw_timestamp
from .model import ClassAttendanceRecord, NewClassAbsenceRow, Schedule
from .repository import ScheduleRepository

_SCHEDULE_COLUMNS = """
    s.id, s.user_id, s.day_of_week, s.start_time, s.end_time,
    s.subject, s.room, s.notes,
    u.name AS user_name, u.role
"""


def _to_schedule(r: dict) -> Schedule:
    return Schedule(
        schedule_id=int(r["id"]),
        user_id=int(r["user_id"]),
        day_of_week=r["day_of_week"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        subject=r.get("subject"),
        room=r.get("room"),
        notes=r.get("notes"),
        user_name=r.get("user_name"),
        role=r.get("role"),
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_with_users(self, *, day_of_week: Optional[str] = None) -> Sequence[Schedule]:
        clauses = []
        params: list[object] = []
        if day_of_week:
            clauses.append("s.day_of_week=%s")
            params.append(day_of_week)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SCHEDULE_COLUMNS}
                FROM schedules s
                JOIN users u ON u.id = s.user_id
                {where}
                ORDER BY s.created_at DESC, s.id DESC
                """,
                tuple(params),
            )
            return [_to_schedule(r) for r in fetchall(cur)]

    def get_by_id(self, schedule_id: int) -> Optional[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SCHEDULE_COLUMNS}
                FROM schedules s
                JOIN users u ON u.id = s.user_id
                WHERE s.id=%s
                """,
                (int(schedule_id),),
            )
            r = fetchone(cur)
            return _to_schedule(r) if r else None

    def list_class_attendance(self, *, att_date: Optional[date] = None) -> Sequence[ClassAttendanceRecord]:
        where = "WHERE att_date=%s" if att_date else ""
        params = (att_date,) if att_date else ()

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, user_id, schedule_id, att_date, time_in, time_out, attendance, status, notes
                FROM class_attendance
                {where}
                ORDER BY created_at DESC, id DESC
                """,
                params,
            )
            rows = fetchall(cur)
            return [
                ClassAttendanceRecord(
                    class_attendance_id=int(r["id"]),
                    user_id=int(r["user_id"]),
                    schedule_id=int(r["schedule_id"]),
                    att_date=r["att_date"],
                    time_in=raw_timestamp(r.get("time_in")),
                    time_out=raw_timestamp(r.get("time_out")),
                    attendance=r.get("attendance"),
                    status=bool(r.get("status") or 0),
                    notes=r.get("notes"),
                )
                for r in rows
            ]

    def insert_class_absence(self, row: NewClassAbsenceRow) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO class_attendance(user_id, schedule_id, att_date, time_in, time_out, attendance, status, notes)
                VALUES(%s, %s, %s, NULL, NULL, %s, %s, %s)
                """,
                (
                    int(row.user_id),
                    int(row.schedule_id),
                    row.att_date,
                    row.attendance,
                    int(row.status),
                    row.notes,
                ),
            )
            return int(cur.lastrowid)
