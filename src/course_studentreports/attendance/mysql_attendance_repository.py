from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..database.mysql_base import MySQLRepository, db_cursor, fetchall, fetchone, in_placeholders
from .model import AttendanceInstance, AttendanceSession
from .repository import AttendanceRepository


class MySQLAttendanceRepository(MySQLRepository, AttendanceRepository):
    def get_instance_for_course(self, course_id: int) -> Optional[AttendanceInstance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, course
                FROM {self._t('attendance')}
                WHERE course=%s
                ORDER BY id ASC
                LIMIT 1
                """,
                (int(course_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return AttendanceInstance(attendance_id=int(row["id"]), course_id=int(row["course"]))

    def list_sessions(self, attendance_id: int) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, attendanceid, sessdate
                FROM {self._t('attendance_sessions')}
                WHERE attendanceid=%s
                ORDER BY sessdate ASC, id ASC
                """,
                (int(attendance_id),),
            )
            return [
                AttendanceSession(
                    session_id=int(r["id"]),
                    attendance_id=int(r["attendanceid"]),
                    sessdate=int(r["sessdate"]),
                )
                for r in fetchall(cur)
            ]

    def get_status_ids(self, attendance_id: int, descriptions: Sequence[str]) -> Sequence[int]:
        if not descriptions:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id
                FROM {self._t('attendance_statuses')}
                WHERE attendanceid=%s AND description IN ({in_placeholders(descriptions)})
                """,
                (int(attendance_id), *descriptions),
            )
            return [int(r["id"]) for r in fetchall(cur)]

    def get_user_log_statuses(self, *, attendance_id: int, user_id: int) -> Mapping[int, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT al.sessionid, al.statusid
                FROM {self._t('attendance_log')} al
                JOIN {self._t('attendance_sessions')} s ON s.id = al.sessionid
                WHERE s.attendanceid=%s AND al.studentid=%s
                """,
                (int(attendance_id), int(user_id)),
            )
            return {int(r["sessionid"]): int(r["statusid"]) for r in fetchall(cur)}

    def count_absences(self, *, attendance_id: int, user_id: int, acronym: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT COUNT(DISTINCT al.sessionid) AS missed
                FROM {self._t('attendance_log')} al
                JOIN {self._t('attendance_sessions')} s ON s.id = al.sessionid
                JOIN {self._t('attendance_statuses')} st ON st.id = al.statusid
                WHERE s.attendanceid=%s AND al.studentid=%s AND st.acronym=%s
                """,
                (int(attendance_id), int(user_id), acronym),
            )
            row = fetchone(cur)
            return int(row["missed"]) if row else 0
