from __future__ import annotations

from typing import Optional, Protocol

from .model import GradeHistoryEntry, GradeItem


class GradeRepository(Protocol):
    def get_course_grade_item(self, course_id: int) -> Optional[GradeItem]:
        """The course total item (itemtype='course'), if the gradebook has one."""

        raise NotImplementedError

    def get_latest_history(self, *, item_id: int, user_id: int) -> Optional[GradeHistoryEntry]:
        """History row with the greatest timemodified (ties: highest id)."""

        raise NotImplementedError
