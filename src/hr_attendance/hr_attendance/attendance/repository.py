from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceRecord, NewAbsenceRow


class AttendanceRepository(Protocol):
    def list_with_users(self) -> Sequence[AttendanceRecord]:
        """All attendance rows joined with the minimal user fields."""

        raise NotImplementedError

    def insert_absence(self, row: NewAbsenceRow) -> int:
        """Insert one backfilled absence. Returns the new row id."""

        raise NotImplementedError

    def delete(self, attendance_id: int) -> bool:
        raise NotImplementedError
