from __future__ import annotations

from typing import Iterable, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def find_by_ids(self, user_ids: Iterable[str]) -> Sequence[User]:
        """Return the users that exist among ``user_ids`` (missing ids are dropped)."""

        raise NotImplementedError
