from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ...exemptions.index import ExemptionIndex
from ...holidays.index import HolidayIndex
from ..model import AttendanceRecord
from .base import ResolutionStrategy, StatusDecision


class ExemptionStrategy(ResolutionStrategy):
    """Approved leave or partial-day exemption for the user on that date."""

    def decide(self, record: AttendanceRecord, *, holidays: HolidayIndex, exemptions: ExemptionIndex) -> Optional[StatusDecision]:
        hit = exemptions.lookup(record.user_id, record.att_date)
        if hit.is_exempted:
            return StatusDecision(status=AttendanceStatus.EXEMPTED, note=hit.reason)
        return None
