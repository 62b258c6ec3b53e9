from __future__ import annotations

from datetime import date
from typing import Iterable, Protocol, Sequence

from .model import Exemption


class ExemptionRepository(Protocol):
    def list_for(self, *, user_ids: Iterable[int], dates: Iterable[date]) -> Sequence[Exemption]:
        """Exemptions with user_id IN user_ids AND exemption_date IN dates (one query)."""

        raise NotImplementedError
