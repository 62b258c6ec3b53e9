from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..exemptions.index import ExemptionIndex
from ..holidays.index import HolidayIndex
from .factory import ResolutionStrategyFactory
from .model import AttendanceRecord, ResolvedAttendance
from .session import classify_session
from .strategies.base import ResolutionStrategy, StatusDecision


class StatusResolver:
    """Classify attendance rows as Present / Late / Absent / Exempted.

    Pure: every lookup comes from the indexes passed in, nothing touches the
    store.
    """

    def __init__(self, chain: Optional[Sequence[ResolutionStrategy]] = None):
        self._chain = list(chain) if chain is not None else ResolutionStrategyFactory().build_chain()

    def decide(self, record: AttendanceRecord, holidays: HolidayIndex, exemptions: ExemptionIndex) -> StatusDecision:
        for strategy in self._chain:
            decision = strategy.decide(record, holidays=holidays, exemptions=exemptions)
            if decision is not None:
                return decision
        return StatusDecision(status=AttendanceStatus.ABSENT)

    def resolve(self, record: AttendanceRecord, holidays: HolidayIndex, exemptions: ExemptionIndex) -> AttendanceStatus:
        return self.decide(record, holidays, exemptions).status

    def resolve_detailed(
        self,
        record: AttendanceRecord,
        holidays: HolidayIndex,
        exemptions: ExemptionIndex,
    ) -> ResolvedAttendance:
        return ResolvedAttendance(
            record=record,
            status=self.resolve(record, holidays, exemptions),
            session=classify_session(record),
            exemption=exemptions.lookup(record.user_id, record.att_date),
            is_holiday=holidays.contains(record.att_date),
        )

    def resolve_all(
        self,
        records: Sequence[AttendanceRecord],
        holidays: HolidayIndex,
        exemptions: ExemptionIndex,
    ) -> list[ResolvedAttendance]:
        return [self.resolve_detailed(r, holidays, exemptions) for r in records]
