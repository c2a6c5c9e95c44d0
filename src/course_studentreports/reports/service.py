from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceContext
from ..attendance.service import AttendanceService
from ..common.datetime_utils import now_timestamp
from ..common.validators import clean_filename
from ..core.enums import ReportColumn
from ..core.exceptions import ValidationError
from ..core.strings import get_string
from ..courses.service import CourseService
from ..grades.model import GradeItem
from ..grades.service import GradeService
from ..users.repository import UserRepository
from .model import ReportData

logger = logging.getLogger(__name__)


def parse_columns(values: Iterable[str]) -> list[ReportColumn]:
    """Map posted display names to columns, keeping the selection order."""
    columns: list[ReportColumn] = []
    for value in values:
        try:
            column = ReportColumn(str(value).strip())
        except ValueError:
            raise ValidationError(get_string("unknownreport", value))
        if column not in columns:
            columns.append(column)
    return columns


class ReportExportService:
    def __init__(
        self,
        users: UserRepository,
        courses: CourseService,
        grades: GradeService,
        attendance: AttendanceService,
    ):
        self._users = users
        self._courses = courses
        self._grades = grades
        self._attendance = attendance

    def build_export(
        self,
        course_id: int,
        user_ids: Sequence[int],
        columns: Sequence[ReportColumn],
        *,
        now: Optional[int] = None,
    ) -> ReportData:
        course = self._courses.get_course(course_id)
        columns = list(dict.fromkeys(columns))

        headers = [get_string("studentnametitle"), get_string("studentemailtitle")]
        headers += [c.value for c in columns]

        # Loaded once; every user row reuses them.
        grade_item: Optional[GradeItem] = None
        if ReportColumn.COURSE_GRADE in columns:
            grade_item = self._grades.course_grade_item(course.course_id)
        attendance_ctx: Optional[AttendanceContext] = None
        if ReportColumn.LAST_ATTENDANCE in columns or ReportColumn.DAYS_MISSED in columns:
            attendance_ctx = self._attendance.load_context(course.course_id)

        wanted = list(dict.fromkeys(int(u) for u in user_ids))
        by_id = {u.user_id: u for u in self._users.get_by_ids(wanted)}
        missing = [u for u in wanted if u not in by_id]
        if missing:
            logger.warning("Export for course %s skips unknown users %s", course.course_id, missing)

        rows: list[list[str]] = []
        for user_id in wanted:
            user = by_id.get(user_id)
            if user is None:
                continue
            row = [user.fullname, user.email]
            for column in columns:
                if column == ReportColumn.COURSE_GRADE:
                    row.append(self._grades.final_grade_cell(grade_item, user.user_id))
                elif column == ReportColumn.LAST_ATTENDANCE:
                    row.append(self._attendance.last_attended_cell(attendance_ctx, user.user_id))
                elif column == ReportColumn.DAYS_MISSED:
                    row.append(self._attendance.days_missed_cell(attendance_ctx, user.user_id))
            rows.append(row)

        filename = clean_filename(
            get_string(
                "csvfilename",
                {"shortname": course.shortname, "time": now if now is not None else now_timestamp()},
            )
        )
        logger.info(
            "Built student report for course %s: %d user(s), columns=%s",
            course.course_id,
            len(rows),
            [c.value for c in columns],
        )
        return ReportData(headers=headers, rows=rows, filename=filename)
