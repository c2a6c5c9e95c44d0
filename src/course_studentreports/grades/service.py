from __future__ import annotations

from typing import Optional

from ..core.constants import DEFAULT_GRADE_DECIMALS
from ..core.strings import get_string
from .model import GradeItem
from .repository import GradeRepository


class GradeService:
    def __init__(self, grades: GradeRepository, *, decimals: int = DEFAULT_GRADE_DECIMALS):
        self._grades = grades
        self._decimals = int(decimals)

    def course_grade_item(self, course_id: int) -> Optional[GradeItem]:
        return self._grades.get_course_grade_item(int(course_id))

    def latest_final_grade(self, item: Optional[GradeItem], user_id: int) -> Optional[float]:
        if item is None:
            return None
        entry = self._grades.get_latest_history(item_id=item.item_id, user_id=int(user_id))
        if entry is None:
            return None
        return entry.finalgrade

    def final_grade_cell(self, item: Optional[GradeItem], user_id: int) -> str:
        grade = self.latest_final_grade(item, user_id)
        if grade is None:
            return get_string("nodata")
        return f"{grade:.{self._decimals}f}"
