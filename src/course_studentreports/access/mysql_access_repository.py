from __future__ import annotations

from ..core.constants import CAP_ALLOW, COURSE_CONTEXT_LEVEL, SYSTEM_CONTEXT_ID
from ..database.mysql_base import MySQLRepository, db_cursor, fetchone
from .repository import AccessRepository


class MySQLAccessRepository(MySQLRepository, AccessRepository):
    def has_course_capability(self, *, user_id: int, course_id: int, capability: str) -> bool:
        # Role definitions live in the system context; overrides are not considered.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT 1 AS ok
                FROM {self._t('role_assignments')} ra
                JOIN {self._t('role_capabilities')} rc
                  ON rc.roleid = ra.roleid
                 AND rc.contextid = %s
                 AND rc.capability = %s
                 AND rc.permission = %s
                WHERE ra.userid = %s
                  AND (
                    ra.contextid = %s
                    OR ra.contextid IN (
                        SELECT ctx.id
                        FROM {self._t('context')} ctx
                        WHERE ctx.contextlevel = %s AND ctx.instanceid = %s
                    )
                  )
                LIMIT 1
                """,
                (
                    SYSTEM_CONTEXT_ID,
                    capability,
                    CAP_ALLOW,
                    int(user_id),
                    SYSTEM_CONTEXT_ID,
                    COURSE_CONTEXT_LEVEL,
                    int(course_id),
                ),
            )
            return fetchone(cur) is not None
