from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import SortColumn, SortDirection
from .model import ParticipantFilter, ParticipantRow


class ParticipantRepository(Protocol):
    def count(self, flt: ParticipantFilter) -> int:
        raise NotImplementedError

    def list(
        self,
        flt: ParticipantFilter,
        *,
        sort: SortColumn,
        direction: SortDirection,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Sequence[ParticipantRow]:
        """Participants without roles filled in."""

        raise NotImplementedError

    def get_roles(self, *, course_id: int, user_ids: Sequence[int]) -> Mapping[int, Sequence[str]]:
        raise NotImplementedError

    def get_lastaccess(self, *, course_id: int, user_ids: Sequence[int]) -> Mapping[int, int]:
        raise NotImplementedError
