from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import GUEST_USER_ID
from ..database.mysql_base import MySQLRepository, db_cursor, fetchall, fetchone, in_placeholders, like_escape
from .model import User
from .repository import UserRepository


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["id"]),
        firstname=row["firstname"] or "",
        lastname=row["lastname"] or "",
        email=row["email"] or "",
    )


class MySQLUserRepository(MySQLRepository, UserRepository):
    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, firstname, lastname, email
                FROM {self._t('user')}
                WHERE id=%s AND deleted=0
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_ids(self, user_ids: Sequence[int]) -> Sequence[User]:
        ids = [int(u) for u in user_ids]
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, firstname, lastname, email
                FROM {self._t('user')}
                WHERE id IN ({in_placeholders(ids)}) AND deleted=0
                """,
                tuple(ids),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def search_potential(
        self,
        *,
        query: str,
        exclude_enrol_id: Optional[int],
        limit: int,
        anywhere: bool = False,
    ) -> Sequence[User]:
        term = like_escape((query or "").strip())
        pattern = f"%{term}%" if anywhere else f"{term}%"

        sql = f"""
            SELECT u.id, u.firstname, u.lastname, u.email
            FROM {self._t('user')} u
            WHERE u.deleted=0
              AND u.id <> %s
              AND (u.firstname LIKE %s ESCAPE '|' OR u.lastname LIKE %s ESCAPE '|' OR u.email LIKE %s ESCAPE '|'
                   OR CONCAT(u.firstname, ' ', u.lastname) LIKE %s ESCAPE '|')
        """
        params: list = [GUEST_USER_ID, pattern, pattern, pattern, pattern]

        if exclude_enrol_id:
            sql += f"""
              AND NOT EXISTS (
                  SELECT 1 FROM {self._t('user_enrolments')} ue
                  WHERE ue.userid = u.id AND ue.enrolid = %s
              )
            """
            params.append(int(exclude_enrol_id))

        sql += " ORDER BY u.lastname ASC, u.firstname ASC, u.id ASC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_user(r) for r in fetchall(cur)]
