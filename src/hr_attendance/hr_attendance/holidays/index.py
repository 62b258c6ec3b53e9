from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, Optional

from ..core.exceptions import StoreError
from .repository import HolidayRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HolidayIndex:
    """Active holiday dates for one resolution pass, loaded with a single query."""

    titles: Dict[date, str] = field(default_factory=dict)

    @classmethod
    def build(cls, repo: HolidayRepository, dates: Iterable[date]) -> "HolidayIndex":
        wanted = {d for d in dates if d is not None}
        if not wanted:
            return cls()

        try:
            holidays = repo.list_active_on(wanted)
        except StoreError:
            logger.exception("Holiday lookup failed for %d date(s); assuming no holidays", len(wanted))
            return cls()

        titles = {h.date: h.title for h in holidays if h.is_active}
        for day, title in sorted(titles.items()):
            logger.info("%s is a holiday: %s", day.isoformat(), title)
        return cls(titles=titles)

    def contains(self, day: date) -> bool:
        return day in self.titles

    def title(self, day: date) -> Optional[str]:
        return self.titles.get(day)

    def __len__(self) -> int:
        return len(self.titles)
