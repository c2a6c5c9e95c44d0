from __future__ import annotations

from typing import Optional

from ..database.mysql_base import MySQLRepository, db_cursor, fetchone
from .model import Course
from .repository import CourseRepository


class MySQLCourseRepository(MySQLRepository, CourseRepository):
    def get_by_id(self, course_id: int) -> Optional[Course]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, shortname, fullname
                FROM {self._t('course')}
                WHERE id=%s
                """,
                (int(course_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Course(
                course_id=int(row["id"]),
                shortname=row["shortname"],
                fullname=row["fullname"],
            )
