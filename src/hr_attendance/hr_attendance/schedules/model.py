from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..exemptions.model import NOT_EXEMPTED, ExemptionLookup


@dataclass(frozen=True)
class Schedule:
    """Recurring class/work assignment on one weekday."""

    schedule_id: int
    user_id: int
    day_of_week: str
    start_time: time
    end_time: time
    subject: Optional[str] = None
    room: Optional[str] = None
    notes: Optional[str] = None
    user_name: Optional[str] = None
    role: Optional[str] = None


@dataclass(frozen=True)
class ClassAttendanceRecord:
    """Tap event for one schedule slot on one date."""

    class_attendance_id: int
    user_id: int
    schedule_id: int
    att_date: date
    time_in: Optional[str] = None
    time_out: Optional[str] = None
    attendance: Optional[str] = None
    status: bool = False
    notes: Optional[str] = None


@dataclass(frozen=True)
class NewClassAbsenceRow:
    user_id: int
    schedule_id: int
    att_date: date
    notes: str
    attendance: str = "Absent"
    status: bool = False


@dataclass(frozen=True)
class ScheduleAttendanceView:
    """A schedule joined with its most recent class attendance."""

    schedule: Schedule
    record: Optional[ClassAttendanceRecord]
    att_date: date
    attendance: str
    exemption: ExemptionLookup = NOT_EXEMPTED
    is_holiday: bool = False

    @property
    def time_in(self) -> Optional[str]:
        return self.record.time_in if self.record else None

    @property
    def time_out(self) -> Optional[str]:
        return self.record.time_out if self.record else None

    @property
    def status(self) -> bool:
        return self.record.status if self.record else False
