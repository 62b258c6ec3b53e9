from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now_utc(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    """Current time from the host clock, always timezone-aware UTC."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass(frozen=True)
class FixedClock:
    """Clock pinned to one instant.

    Note: Used by tests and by CLI runs that replay a given moment.
    """

    instant: datetime

    def now_utc(self) -> datetime:
        if self.instant.tzinfo is None:
            return self.instant.replace(tzinfo=timezone.utc)
        return self.instant.astimezone(timezone.utc)
