from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import ClassAttendanceRecord, NewClassAbsenceRow, Schedule


class ScheduleRepository(Protocol):
    def list_with_users(self, *, day_of_week: Optional[str] = None) -> Sequence[Schedule]:
        """Schedules joined with their owner, newest first; optionally one weekday only."""

        raise NotImplementedError

    def get_by_id(self, schedule_id: int) -> Optional[Schedule]:
        raise NotImplementedError

    def list_class_attendance(self, *, att_date: Optional[date] = None) -> Sequence[ClassAttendanceRecord]:
        """Class attendance rows, newest first; optionally restricted to one date."""

        raise NotImplementedError

    def insert_class_absence(self, row: NewClassAbsenceRow) -> int:
        raise NotImplementedError
