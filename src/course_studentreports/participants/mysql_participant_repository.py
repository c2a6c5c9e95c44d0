from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..core.constants import COURSE_CONTEXT_LEVEL
from ..core.enums import SortColumn, SortDirection
from ..database.mysql_base import MySQLRepository, db_cursor, fetchall, fetchone, in_placeholders, like_escape
from .model import ParticipantFilter, ParticipantRow
from .repository import ParticipantRepository

_SORT_SQL = {
    SortColumn.LASTNAME: "u.lastname {dir}, u.firstname {dir}",
    SortColumn.FIRSTNAME: "u.firstname {dir}, u.lastname {dir}",
    SortColumn.EMAIL: "u.email {dir}",
    SortColumn.LASTACCESS: "lastaccess_sort {dir}",
}


class MySQLParticipantRepository(MySQLRepository, ParticipantRepository):
    def _from_where(self, flt: ParticipantFilter) -> tuple[str, list]:
        sql = f"""
            FROM {self._t('user')} u
            JOIN {self._t('role_assignments')} ra ON ra.userid = u.id AND ra.roleid = %s
            JOIN {self._t('context')} ctx
              ON ctx.id = ra.contextid AND ctx.contextlevel = %s AND ctx.instanceid = %s
            LEFT JOIN {self._t('user_lastaccess')} ul ON ul.userid = u.id AND ul.courseid = %s
            WHERE u.deleted = 0
              AND EXISTS (
                  SELECT 1
                  FROM {self._t('user_enrolments')} ue
                  JOIN {self._t('enrol')} e ON e.id = ue.enrolid
                  WHERE ue.userid = u.id AND e.courseid = %s
              )
        """
        params: list = [
            int(flt.role_id),
            COURSE_CONTEXT_LEVEL,
            int(flt.course_id),
            int(flt.course_id),
            int(flt.course_id),
        ]

        if flt.keywords:
            like = f"%{like_escape(flt.keywords.strip())}%"
            sql += " AND (CONCAT(u.firstname, ' ', u.lastname) LIKE %s ESCAPE '|' OR u.email LIKE %s ESCAPE '|')"
            params += [like, like]

        if flt.accesssince:
            # Users inactive since the given time, including those who never came.
            sql += " AND (ul.timeaccess IS NULL OR ul.timeaccess < %s)"
            params.append(int(flt.accesssince))

        if flt.first_initial:
            sql += " AND u.firstname LIKE %s ESCAPE '|'"
            params.append(f"{flt.first_initial}%")

        if flt.last_initial:
            sql += " AND u.lastname LIKE %s ESCAPE '|'"
            params.append(f"{flt.last_initial}%")

        return sql, params

    def count(self, flt: ParticipantFilter) -> int:
        from_where, params = self._from_where(flt)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(DISTINCT u.id) AS total {from_where}", tuple(params))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def list(
        self,
        flt: ParticipantFilter,
        *,
        sort: SortColumn,
        direction: SortDirection,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Sequence[ParticipantRow]:
        from_where, params = self._from_where(flt)
        order = _SORT_SQL[sort].format(dir="DESC" if direction == SortDirection.DESC else "ASC")

        sql = f"""
            SELECT DISTINCT u.id, u.firstname, u.lastname, u.email, ul.timeaccess,
                   COALESCE(ul.timeaccess, 0) AS lastaccess_sort
            {from_where}
            ORDER BY {order}, u.id ASC
        """
        if limit is not None:
            sql += " LIMIT %s OFFSET %s"
            params += [int(limit), int(offset)]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                ParticipantRow(
                    user_id=int(r["id"]),
                    firstname=r["firstname"] or "",
                    lastname=r["lastname"] or "",
                    email=r["email"] or "",
                    lastaccess=int(r["timeaccess"]) if r.get("timeaccess") else None,
                )
                for r in fetchall(cur)
            ]

    def get_roles(self, *, course_id: int, user_ids: Sequence[int]) -> Mapping[int, Sequence[str]]:
        ids = [int(u) for u in user_ids]
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT ra.userid, r.shortname, r.name
                FROM {self._t('role_assignments')} ra
                JOIN {self._t('role')} r ON r.id = ra.roleid
                JOIN {self._t('context')} ctx
                  ON ctx.id = ra.contextid AND ctx.contextlevel = %s AND ctx.instanceid = %s
                WHERE ra.userid IN ({in_placeholders(ids)})
                ORDER BY r.sortorder ASC
                """,
                (COURSE_CONTEXT_LEVEL, int(course_id), *ids),
            )
            roles: dict[int, list[str]] = {}
            for r in fetchall(cur):
                name = r.get("name") or str(r["shortname"]).capitalize()
                bucket = roles.setdefault(int(r["userid"]), [])
                if name not in bucket:
                    bucket.append(name)
            return roles

    def get_lastaccess(self, *, course_id: int, user_ids: Sequence[int]) -> Mapping[int, int]:
        ids = [int(u) for u in user_ids]
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT userid, timeaccess
                FROM {self._t('user_lastaccess')}
                WHERE courseid = %s AND userid IN ({in_placeholders(ids)})
                """,
                (int(course_id), *ids),
            )
            return {int(r["userid"]): int(r["timeaccess"]) for r in fetchall(cur) if r.get("timeaccess")}
