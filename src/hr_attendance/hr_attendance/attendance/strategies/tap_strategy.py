from __future__ import annotations

from typing import Optional

from ...common.manila_time import to_manila_minutes
from ...core.constants import (
    AFTERNOON_END,
    AFTERNOON_GRACE_END,
    AFTERNOON_START,
    MORNING_GRACE_END,
    MORNING_START,
    NOON,
)
from ...core.enums import AttendanceStatus
from ...exemptions.index import ExemptionIndex
from ...holidays.index import HolidayIndex
from ..model import AttendanceRecord
from .base import ResolutionStrategy, StatusDecision


def is_late_minutes(minutes: Optional[int]) -> bool:
    """Lateness of a check-in given its Manila minutes after midnight.

    Unknown times are never late. Anything outside both session windows
    (before 07:00, lunch break, after 19:00) counts as late.
    """

    if minutes is None:
        return False
    if MORNING_START <= minutes <= NOON:
        return minutes > MORNING_GRACE_END
    if AFTERNOON_START <= minutes <= AFTERNOON_END:
        return minutes > AFTERNOON_GRACE_END
    return True


class TapStrategy(ResolutionStrategy):
    """Decide from the taps themselves; always returns a decision."""

    def decide(self, record: AttendanceRecord, *, holidays: HolidayIndex, exemptions: ExemptionIndex) -> Optional[StatusDecision]:
        if record.has_time_in and record.has_time_out:
            # A completed session is Present even when the check-in was late.
            return StatusDecision(status=AttendanceStatus.PRESENT)

        if record.has_time_in:
            late = is_late_minutes(to_manila_minutes(record.time_in))
            return StatusDecision(status=AttendanceStatus.LATE if late else AttendanceStatus.PRESENT)

        if record.has_time_out:
            return StatusDecision(status=AttendanceStatus.PRESENT, note="Check-out without check-in")

        return StatusDecision(status=AttendanceStatus.ABSENT)
