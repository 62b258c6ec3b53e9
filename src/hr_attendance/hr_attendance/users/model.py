from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """Minimal user fields the attendance engine needs (id, name, role)."""

    user_id: int
    name: str
    role: str
    email: Optional[str] = None
