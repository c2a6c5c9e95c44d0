from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import format_timestamp
from ..core.constants import ABSENT_ACRONYM, DATE_FORMAT, PRESENT_STATUSES
from ..core.strings import get_string
from .model import AttendanceContext, AttendanceSession
from .repository import AttendanceRepository


class AttendanceService:
    """Attendance lookups for the report columns.

    A course without an attendance activity has no context; every
    attendance cell then reads "No Data".
    """

    def __init__(self, attendance: AttendanceRepository, *, timezone: Optional[str] = None):
        self._attendance = attendance
        self._timezone = timezone

    def load_context(self, course_id: int) -> Optional[AttendanceContext]:
        instance = self._attendance.get_instance_for_course(int(course_id))
        if instance is None:
            return None

        sessions = list(self._attendance.list_sessions(instance.attendance_id))
        sessions.reverse()
        status_ids = self._attendance.get_status_ids(instance.attendance_id, PRESENT_STATUSES)

        return AttendanceContext(
            instance=instance,
            sessions_newest_first=tuple(sessions),
            attended_status_ids=frozenset(status_ids),
        )

    def last_attended_session(self, ctx: AttendanceContext, user_id: int) -> Optional[AttendanceSession]:
        """Newest session where the user was marked present or late."""
        logs = self._attendance.get_user_log_statuses(
            attendance_id=ctx.instance.attendance_id, user_id=int(user_id)
        )
        if not logs:
            return None
        for session in ctx.sessions_newest_first:
            status_id = logs.get(session.session_id)
            if status_id is not None and status_id in ctx.attended_status_ids:
                return session
        return None

    def last_attended_cell(self, ctx: Optional[AttendanceContext], user_id: int) -> str:
        if ctx is None:
            return get_string("nodata")
        session = self.last_attended_session(ctx, user_id)
        if session is None:
            return get_string("nodata")
        return format_timestamp(session.sessdate, DATE_FORMAT, self._timezone)

    def days_missed_cell(self, ctx: Optional[AttendanceContext], user_id: int) -> str:
        if ctx is None:
            return get_string("nodata")
        missed = self._attendance.count_absences(
            attendance_id=ctx.instance.attendance_id,
            user_id=int(user_id),
            acronym=ABSENT_ACRONYM,
        )
        return str(missed or 0)
