from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus
from ...exemptions.index import ExemptionIndex
from ...holidays.index import HolidayIndex
from ..model import AttendanceRecord


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class ResolutionStrategy(ABC):
    """Strategy Pattern: one precedence step of status resolution.

    A strategy returns a decision when its rule applies and ``None`` to pass the
    record on to the next step.
    """

    @abstractmethod
    def decide(
        self,
        record: AttendanceRecord,
        *,
        holidays: HolidayIndex,
        exemptions: ExemptionIndex,
    ) -> Optional[StatusDecision]:
        raise NotImplementedError
