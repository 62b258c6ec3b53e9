from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ...exemptions.index import ExemptionIndex
from ...holidays.index import HolidayIndex
from ..model import AttendanceRecord
from .base import ResolutionStrategy, StatusDecision


class ExplicitAbsenceStrategy(ResolutionStrategy):
    """Upstream system flagged the row as not present."""

    def decide(self, record: AttendanceRecord, *, holidays: HolidayIndex, exemptions: ExemptionIndex) -> Optional[StatusDecision]:
        if record.explicit_present is False:
            return StatusDecision(status=AttendanceStatus.ABSENT)
        return None


class NoActivityStrategy(ResolutionStrategy):
    """Neither a check-in nor a check-out."""

    def decide(self, record: AttendanceRecord, *, holidays: HolidayIndex, exemptions: ExemptionIndex) -> Optional[StatusDecision]:
        if not record.has_time_in and not record.has_time_out:
            return StatusDecision(status=AttendanceStatus.ABSENT)
        return None
