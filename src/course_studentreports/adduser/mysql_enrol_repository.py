from __future__ import annotations

from typing import Sequence

from ..database.mysql_base import MySQLRepository, db_cursor, fetchall
from .model import EnrolInstance
from .repository import EnrolRepository


class MySQLEnrolRepository(MySQLRepository, EnrolRepository):
    def list_instances(self, course_id: int) -> Sequence[EnrolInstance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, courseid, enrol, status
                FROM {self._t('enrol')}
                WHERE courseid=%s
                ORDER BY sortorder ASC, id ASC
                """,
                (int(course_id),),
            )
            return [
                EnrolInstance(
                    enrol_id=int(r["id"]),
                    course_id=int(r["courseid"]),
                    enrol=r["enrol"],
                    status=int(r.get("status") or 0),
                )
                for r in fetchall(cur)
            ]
