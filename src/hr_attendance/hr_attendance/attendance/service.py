from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import date
from typing import List

from ..common.datetime_utils import Clock
from ..common.manila_time import (
    format_clock_12h,
    format_manila_clock,
    manila_now_minutes,
    manila_today,
    to_manila_datetime,
)
from ..core.enums import AttendanceStatus
from ..core.exceptions import RefreshInProgressError, StoreError, ValidationError
from ..exemptions.index import ExemptionIndex
from ..exemptions.repository import ExemptionRepository
from ..holidays.index import HolidayIndex
from ..holidays.repository import HolidayRepository
from ..schedules.class_backfill import ClassBackfillJob
from ..schedules.matcher import ScheduleAttendanceMatcher, reference_dates
from ..schedules.model import NewClassAbsenceRow, ScheduleAttendanceView
from ..schedules.repository import ScheduleRepository
from ..schedules.tap_window import TapWindow, classify_class_tap
from ..users.repository import UserRepository
from .backfill import BackfillJob
from .model import AttendanceRecord, PersistedId, RecordIdentity, ResolvedAttendance, SyntheticKey
from .repository import AttendanceRepository
from .resolver import StatusResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceSnapshot:
    """Result of one refresh: resolved daily rows and the schedule view."""

    today: date
    records: List[ResolvedAttendance] = field(default_factory=list)
    schedules: List[ScheduleAttendanceView] = field(default_factory=list)
    backfilled: int = 0

    def count(self, status: AttendanceStatus) -> int:
        return sum(1 for r in self.records if r.status == status)


def _latest_activity(resolved: ResolvedAttendance) -> float:
    stamps = [to_manila_datetime(resolved.record.time_in), to_manila_datetime(resolved.record.time_out)]
    return max((s.timestamp() for s in stamps if s is not None), default=0.0)


class AttendanceService:
    """Refresh pipeline behind the attendance dashboards.

    One refresh: fetch rows, build the holiday/exemption indexes with one
    batched query each, resolve every row, backfill today's absences, then
    build the schedule-anchored view.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        holidays: HolidayRepository,
        exemptions: ExemptionRepository,
        schedules: ScheduleRepository,
        clock: Clock,
        *,
        resolver: StatusResolver | None = None,
        matcher: ScheduleAttendanceMatcher | None = None,
        backfill_on_refresh: bool = True,
    ):
        self._attendance = attendance
        self._holidays = holidays
        self._exemptions = exemptions
        self._schedules = schedules
        self._clock = clock
        self._resolver = resolver or StatusResolver()
        self._matcher = matcher or ScheduleAttendanceMatcher()
        self._backfill_on_refresh = bool(backfill_on_refresh)
        self._backfill = BackfillJob(attendance, users, holidays, exemptions, clock)
        self._class_backfill = ClassBackfillJob(schedules, holidays, exemptions, clock)
        self._in_flight = threading.Lock()

    def refresh(self) -> AttendanceSnapshot:
        if not self._in_flight.acquire(blocking=False):
            raise RefreshInProgressError("An attendance refresh is already running")
        try:
            return self._refresh()
        finally:
            self._in_flight.release()

    def _refresh(self) -> AttendanceSnapshot:
        today = manila_today(self._clock)
        records = self._load_records()

        user_ids = {r.user_id for r in records}
        dates = {r.att_date for r in records}
        holidays = HolidayIndex.build(self._holidays, dates | {today})
        exemptions = ExemptionIndex.build(self._exemptions, user_ids, dates)

        resolved = self._resolver.resolve_all(records, holidays, exemptions)
        resolved.sort(key=_latest_activity, reverse=True)

        backfilled: List[AttendanceRecord] = []
        if self._backfill_on_refresh:
            backfilled = self._backfill.run(records, holidays=holidays)
            resolved.extend(self._resolver.resolve_all(backfilled, holidays, ExemptionIndex()))

        return AttendanceSnapshot(
            today=today,
            records=resolved,
            schedules=self._schedule_view(today),
            backfilled=len(backfilled),
        )

    def _load_records(self) -> List[AttendanceRecord]:
        try:
            return list(self._attendance.list_with_users())
        except StoreError:
            logger.exception("Attendance fetch failed")
            return []

    def _schedule_view(self, today: date) -> List[ScheduleAttendanceView]:
        try:
            schedules = self._schedules.list_with_users()
            class_records = self._schedules.list_class_attendance()
        except StoreError:
            logger.exception("Schedule attendance fetch failed")
            return []

        dates = reference_dates(class_records, today)
        holidays = HolidayIndex.build(self._holidays, dates)
        exemptions = ExemptionIndex.build(self._exemptions, {s.user_id for s in schedules}, dates)
        return self._matcher.match(
            schedules,
            class_records,
            holidays=holidays,
            exemptions=exemptions,
            today=today,
        )

    def backfill_absences(self) -> List[AttendanceRecord]:
        """Run only the daily absence backfill (CLI / scheduler entry point)."""

        return self._backfill.run(self._load_records())

    def backfill_class_absences(self) -> List[NewClassAbsenceRow]:
        return self._class_backfill.run()

    def delete_record(self, identity: RecordIdentity) -> None:
        if isinstance(identity, SyntheticKey):
            raise ValidationError("Automatically generated absences cannot be deleted")
        if not self._attendance.delete(identity.value):
            raise ValidationError("Attendance record not found")
        logger.info("Deleted attendance record %s", identity.value)

    def tap_window(self, schedule_id: int) -> TapWindow:
        schedule = self._schedules.get_by_id(schedule_id)
        if not schedule:
            raise ValidationError("Schedule not found")
        return classify_class_tap(manila_now_minutes(self._clock), schedule.start_time, schedule.end_time)

    def to_ui(self, r: ResolvedAttendance) -> dict:
        status = r.status
        css = {
            AttendanceStatus.PRESENT: "bg-success",
            AttendanceStatus.LATE: "bg-warning text-dark",
            AttendanceStatus.ABSENT: "bg-danger",
            AttendanceStatus.EXEMPTED: "bg-info",
        }.get(status, "bg-secondary")

        rec = r.record
        return {
            "id": rec.identity.value if isinstance(rec.identity, PersistedId) else str(rec.identity),
            "deletable": not rec.is_synthetic,
            "user_id": rec.user_id,
            "name": rec.user_name,
            "role": rec.role,
            "date": rec.att_date.strftime("%Y-%m-%d"),
            "time_in": format_manila_clock(rec.time_in) if rec.time_in else "-",
            "time_out": format_manila_clock(rec.time_out) if rec.time_out else "-",
            "session": r.session.value if r.session else "-",
            "status": status.value,
            "css_class": css,
            "is_holiday": r.is_holiday,
            "exemption": r.exemption.to_dict(),
        }

    def schedule_to_ui(self, v: ScheduleAttendanceView) -> dict:
        s = v.schedule
        return {
            "schedule_id": s.schedule_id,
            "user_id": s.user_id,
            "name": s.user_name,
            "role": s.role,
            "day_of_week": s.day_of_week,
            "start_time": format_clock_12h(s.start_time),
            "end_time": format_clock_12h(s.end_time),
            "subject": s.subject or "",
            "room": s.room or "",
            "date": v.att_date.strftime("%Y-%m-%d"),
            "time_in": format_manila_clock(v.time_in) if v.time_in else "-",
            "time_out": format_manila_clock(v.time_out) if v.time_out else "-",
            "attendance": v.attendance,
            "status": v.status,
            "is_holiday": v.is_holiday,
            "exemption": v.exemption.to_dict(),
        }
