from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from .model import AttendanceInstance, AttendanceSession


class AttendanceRepository(Protocol):
    def get_instance_for_course(self, course_id: int) -> Optional[AttendanceInstance]:
        raise NotImplementedError

    def list_sessions(self, attendance_id: int) -> Sequence[AttendanceSession]:
        """Sessions ordered by session date, oldest first."""

        raise NotImplementedError

    def get_status_ids(self, attendance_id: int, descriptions: Sequence[str]) -> Sequence[int]:
        raise NotImplementedError

    def get_user_log_statuses(self, *, attendance_id: int, user_id: int) -> Mapping[int, int]:
        """session id -> status id recorded for the user."""

        raise NotImplementedError

    def count_absences(self, *, attendance_id: int, user_id: int, acronym: str) -> int:
        raise NotImplementedError
