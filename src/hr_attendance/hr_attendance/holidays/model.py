from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Holiday:
    """Organization-wide non-working day. Only active holidays suppress attendance."""

    holiday_id: int
    date: date
    title: str
    is_active: bool = True
