from __future__ import annotations

from typing import Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    def list_by_roles(self, roles: Sequence[str]) -> Sequence[User]:
        """Roster of users holding any of the given roles."""

        raise NotImplementedError
