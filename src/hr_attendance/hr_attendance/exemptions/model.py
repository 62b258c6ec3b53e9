from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import ExemptionType

FULL_DAY_REQUEST_TYPE = "Leave"


@dataclass(frozen=True)
class Exemption:
    """Approved leave or partial-day carve-out for one user on one date."""

    exemption_id: int
    user_id: int
    exemption_date: date
    request_type: str
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    reason: Optional[str] = None

    @property
    def exemption_type(self) -> ExemptionType:
        if self.request_type == FULL_DAY_REQUEST_TYPE or (self.start_time is None and self.end_time is None):
            return ExemptionType.FULL_DAY
        return ExemptionType.TIME_SPECIFIC


@dataclass(frozen=True)
class ExemptionLookup:
    """Result of an exemption lookup; ``NOT_EXEMPTED`` when nothing applies."""

    is_exempted: bool
    type: Optional[ExemptionType] = None
    reason: Optional[str] = None
    request_type: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None

    @classmethod
    def from_exemption(cls, exemption: Exemption) -> "ExemptionLookup":
        return cls(
            is_exempted=True,
            type=exemption.exemption_type,
            reason=exemption.reason,
            request_type=exemption.request_type,
            start_time=exemption.start_time,
            end_time=exemption.end_time,
        )

    def to_dict(self) -> dict:
        if not self.is_exempted:
            return {"isExempted": False}
        return {
            "isExempted": True,
            "type": self.type.value if self.type else None,
            "reason": self.reason,
            "requestType": self.request_type,
            "startTime": self.start_time.strftime("%H:%M:%S") if self.start_time else None,
            "endTime": self.end_time.strftime("%H:%M:%S") if self.end_time else None,
        }


NOT_EXEMPTED = ExemptionLookup(is_exempted=False)
