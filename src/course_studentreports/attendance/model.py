from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AttendanceInstance:
    """An attendance activity inside a course."""

    attendance_id: int
    course_id: int


@dataclass(frozen=True)
class AttendanceSession:
    session_id: int
    attendance_id: int
    sessdate: int


@dataclass(frozen=True)
class AttendanceContext:
    """Per-export attendance data, loaded once for all users."""

    instance: AttendanceInstance
    sessions_newest_first: tuple[AttendanceSession, ...]
    attended_status_ids: frozenset[int]
