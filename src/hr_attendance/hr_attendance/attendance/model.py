from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from ..core.constants import ABSENT_PENALTY_AMOUNT, AUTO_ABSENT_NOTE
from ..core.enums import AttendanceStatus, Session
from ..exemptions.model import NOT_EXEMPTED, ExemptionLookup


@dataclass(frozen=True)
class PersistedId:
    """Identity of a row assigned by the store."""

    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SyntheticKey:
    """Identity of an absence row generated by the backfill job in this pass."""

    user_id: int
    att_date: date

    def __str__(self) -> str:
        return f"auto_absent_{self.user_id}_{self.att_date.isoformat()}"


RecordIdentity = Union[PersistedId, SyntheticKey]


@dataclass(frozen=True)
class AttendanceRecord:
    """One tap pair per user per session per day, as read from the store.

    ``time_in``/``time_out`` stay raw (ISO text, UTC unless marked otherwise);
    conversion to Manila time happens in ``common.manila_time``.
    """

    identity: RecordIdentity
    user_id: int
    att_date: date
    time_in: Optional[str] = None
    time_out: Optional[str] = None
    explicit_present: Optional[bool] = None
    session: Optional[Session] = None
    notes: Optional[str] = None
    user_name: Optional[str] = None
    role: Optional[str] = None

    @property
    def is_synthetic(self) -> bool:
        return isinstance(self.identity, SyntheticKey)

    @property
    def has_time_in(self) -> bool:
        return bool(self.time_in)

    @property
    def has_time_out(self) -> bool:
        return bool(self.time_out)

    @property
    def is_absence_marker(self) -> bool:
        return not self.has_time_in and not self.has_time_out and self.explicit_present is None


@dataclass(frozen=True)
class NewAbsenceRow:
    """Insert payload for an automatically generated full-day absence."""

    user_id: int
    att_date: date
    status: bool = False
    late_minutes: int = 0
    overtime_minutes: int = 0
    penalty_amount: int = ABSENT_PENALTY_AMOUNT
    notes: str = AUTO_ABSENT_NOTE


@dataclass(frozen=True)
class ResolvedAttendance:
    """Read-model handed to the dashboard: a record plus everything decided about it."""

    record: AttendanceRecord
    status: AttendanceStatus
    session: Optional[Session] = None
    exemption: ExemptionLookup = NOT_EXEMPTED
    is_holiday: bool = False
