from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ...exemptions.index import ExemptionIndex
from ...holidays.index import HolidayIndex
from ..model import AttendanceRecord
from .base import ResolutionStrategy, StatusDecision


class HolidayStrategy(ResolutionStrategy):
    """Active holiday: exempted no matter what was tapped."""

    def decide(self, record: AttendanceRecord, *, holidays: HolidayIndex, exemptions: ExemptionIndex) -> Optional[StatusDecision]:
        if holidays.contains(record.att_date):
            return StatusDecision(status=AttendanceStatus.EXEMPTED, note=holidays.title(record.att_date))
        return None
