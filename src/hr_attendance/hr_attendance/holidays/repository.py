from __future__ import annotations

from datetime import date
from typing import Iterable, Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    def list_active_on(self, dates: Iterable[date]) -> Sequence[Holiday]:
        """Active holidays falling on any of the given dates (one query)."""

        raise NotImplementedError
