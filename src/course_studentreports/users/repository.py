from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    """Repository interface for host platform users.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_ids(self, user_ids: Sequence[int]) -> Sequence[User]:
        """Users that exist (and are not deleted); order is not guaranteed."""

        raise NotImplementedError

    def search_potential(
        self,
        *,
        query: str,
        exclude_enrol_id: Optional[int],
        limit: int,
        anywhere: bool = False,
    ) -> Sequence[User]:
        raise NotImplementedError
