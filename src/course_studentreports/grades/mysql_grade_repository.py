from __future__ import annotations

from typing import Optional

from ..database.mysql_base import MySQLRepository, db_cursor, fetchone
from .model import GradeHistoryEntry, GradeItem
from .repository import GradeRepository


class MySQLGradeRepository(MySQLRepository, GradeRepository):
    def get_course_grade_item(self, course_id: int) -> Optional[GradeItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, courseid, itemtype
                FROM {self._t('grade_items')}
                WHERE courseid=%s AND itemtype='course'
                ORDER BY id ASC
                LIMIT 1
                """,
                (int(course_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return GradeItem(item_id=int(row["id"]), course_id=int(row["courseid"]), itemtype=row["itemtype"])

    def get_latest_history(self, *, item_id: int, user_id: int) -> Optional[GradeHistoryEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, itemid, userid, finalgrade, timemodified
                FROM {self._t('grade_grades_history')}
                WHERE itemid=%s AND userid=%s
                ORDER BY timemodified DESC, id DESC
                LIMIT 1
                """,
                (int(item_id), int(user_id)),
            )
            row = fetchone(cur)
            if not row:
                return None
            return GradeHistoryEntry(
                history_id=int(row["id"]),
                item_id=int(row["itemid"]),
                user_id=int(row["userid"]),
                finalgrade=float(row["finalgrade"]) if row.get("finalgrade") is not None else None,
                timemodified=int(row.get("timemodified") or 0),
            )
