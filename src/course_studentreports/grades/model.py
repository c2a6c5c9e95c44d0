from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GradeItem:
    item_id: int
    course_id: int
    itemtype: str


@dataclass(frozen=True)
class GradeHistoryEntry:
    """Snapshot of a user's grade at a point in time."""

    history_id: int
    item_id: int
    user_id: int
    finalgrade: Optional[float]
    timemodified: int
