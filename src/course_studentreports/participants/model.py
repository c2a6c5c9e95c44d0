from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import SortColumn, SortDirection


@dataclass(frozen=True)
class ParticipantFilter:
    """Which participants to include: course + role, plus optional filters."""

    course_id: int
    role_id: int
    keywords: Optional[str] = None
    accesssince: Optional[int] = None
    first_initial: Optional[str] = None
    last_initial: Optional[str] = None


@dataclass(frozen=True)
class ParticipantRow:
    """Read-model for one line of the participants table."""

    user_id: int
    firstname: str
    lastname: str
    email: str
    lastaccess: Optional[int] = None
    roles: tuple[str, ...] = ()
    staged: bool = False

    @property
    def fullname(self) -> str:
        return f"{self.firstname} {self.lastname}"


@dataclass(frozen=True)
class ParticipantsPage:
    rows: list[ParticipantRow]
    total: int
    page: int
    per_page: int
    sort: SortColumn = SortColumn.LASTNAME
    direction: SortDirection = SortDirection.ASC
    staged_count: int = 0

    @property
    def page_count(self) -> int:
        if self.per_page <= 0:
            return 1
        return max((self.total + self.per_page - 1) // self.per_page, 1)
