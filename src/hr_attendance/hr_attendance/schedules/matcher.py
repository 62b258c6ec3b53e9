from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Sequence, Set

from ..attendance.factory import ResolutionStrategyFactory
from ..attendance.model import AttendanceRecord, PersistedId
from ..core.enums import AttendanceStatus
from ..exemptions.index import ExemptionIndex
from ..holidays.index import HolidayIndex
from .model import ClassAttendanceRecord, Schedule, ScheduleAttendanceView


def latest_by_schedule(records: Iterable[ClassAttendanceRecord]) -> Dict[int, ClassAttendanceRecord]:
    """Most recent class attendance per schedule id (ties keep the first row seen)."""

    latest: Dict[int, ClassAttendanceRecord] = {}
    for rec in records:
        current = latest.get(rec.schedule_id)
        if current is None or rec.att_date > current.att_date:
            latest[rec.schedule_id] = rec
    return latest


def reference_dates(records: Iterable[ClassAttendanceRecord], today: date) -> Set[date]:
    """Dates the schedule view needs holiday/exemption data for."""

    return {r.att_date for r in records} | {today}


class ScheduleAttendanceMatcher:
    """Join schedules to their latest class attendance and derive a display status.

    Holidays and exemptions override with the same precedence used for daily
    attendance; otherwise the stored class status is shown as-is.
    """

    def __init__(self, factory: ResolutionStrategyFactory | None = None):
        self._overrides = (factory or ResolutionStrategyFactory()).build_override_chain()

    def match(
        self,
        schedules: Sequence[Schedule],
        class_records: Sequence[ClassAttendanceRecord],
        *,
        holidays: HolidayIndex,
        exemptions: ExemptionIndex,
        today: date,
    ) -> List[ScheduleAttendanceView]:
        latest = latest_by_schedule(class_records)
        views: List[ScheduleAttendanceView] = []

        for schedule in schedules:
            record = latest.get(schedule.schedule_id)
            check_date = record.att_date if record else today

            probe = AttendanceRecord(
                identity=PersistedId(schedule.schedule_id),
                user_id=schedule.user_id,
                att_date=check_date,
            )
            attendance = record.attendance if record and record.attendance else AttendanceStatus.ABSENT.value
            for strategy in self._overrides:
                decision = strategy.decide(probe, holidays=holidays, exemptions=exemptions)
                if decision is not None:
                    attendance = decision.status.value
                    break

            views.append(
                ScheduleAttendanceView(
                    schedule=schedule,
                    record=record,
                    att_date=check_date,
                    attendance=attendance,
                    exemption=exemptions.lookup(schedule.user_id, check_date),
                    is_holiday=holidays.contains(check_date),
                )
            )
        return views
