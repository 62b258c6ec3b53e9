from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, Set, Tuple

from ..core.exceptions import StoreError
from .model import NOT_EXEMPTED, ExemptionLookup
from .repository import ExemptionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExemptionIndex:
    """Per (user, date) exemptions for one resolution pass.

    Built from a single batched query over every involved user and date, then
    answered from memory. When several exemptions share a key the last one read
    wins, mirroring how the dashboard has always displayed them.
    """

    entries: Dict[Tuple[int, date], ExemptionLookup] = field(default_factory=dict)

    @classmethod
    def build(cls, repo: ExemptionRepository, user_ids: Iterable[int], dates: Iterable[date]) -> "ExemptionIndex":
        ids = {int(u) for u in user_ids if u is not None}
        days = {d for d in dates if d is not None}
        if not ids or not days:
            return cls()

        try:
            exemptions = repo.list_for(user_ids=ids, dates=days)
        except StoreError:
            logger.exception(
                "Exemption lookup failed for %d user(s) x %d date(s); assuming nobody is exempted",
                len(ids),
                len(days),
            )
            return cls()

        entries: Dict[Tuple[int, date], ExemptionLookup] = {}
        for ex in exemptions:
            entries[(ex.user_id, ex.exemption_date)] = ExemptionLookup.from_exemption(ex)
        return cls(entries=entries)

    def lookup(self, user_id: int, day: date) -> ExemptionLookup:
        return self.entries.get((user_id, day), NOT_EXEMPTED)

    def is_exempted(self, user_id: int, day: date) -> bool:
        return self.lookup(user_id, day).is_exempted

    def exempted_user_ids(self, day: date) -> Set[int]:
        return {user_id for (user_id, d), hit in self.entries.items() if d == day and hit.is_exempted}

    def __len__(self) -> int:
        return len(self.entries)
