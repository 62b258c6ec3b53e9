from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, SystemClock
from .database.connection import DBConfig, DatabaseConnection
from .exemptions.mysql_exemption_repository import MySQLExemptionRepository
from .exemptions.repository import ExemptionRepository
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection | None

    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    holidays_repo: HolidayRepository
    exemptions_repo: ExemptionRepository
    schedules_repo: ScheduleRepository

    clock: Clock
    attendance_service: AttendanceService


def build_container(*, db_config: dict, clock: Clock | None = None, backfill_on_refresh: bool = True) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)
    clock = clock or SystemClock()

    users_repo = MySQLUserRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    holidays_repo = MySQLHolidayRepository(conn)
    exemptions_repo = MySQLExemptionRepository(conn)
    schedules_repo = MySQLScheduleRepository(conn)

    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        holidays_repo,
        exemptions_repo,
        schedules_repo,
        clock,
        backfill_on_refresh=backfill_on_refresh,
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        holidays_repo=holidays_repo,
        exemptions_repo=exemptions_repo,
        schedules_repo=schedules_repo,
        clock=clock,
        attendance_service=attendance_service,
    )
