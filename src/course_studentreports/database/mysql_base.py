from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_placeholders(values: Sequence[Any]) -> str:
    """'%s,%s,%s' for an IN (...) clause; callers must not pass an empty list."""
    if not values:
        raise ValueError("IN clause needs at least one value")
    return ",".join(["%s"] * len(values))


class MySQLRepository:
    """Common base: holds the connection factory and resolves prefixed table names."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _t(self, name: str) -> str:
        return f"{self._conn_factory.prefix}{name}"


LIKE_ESCAPE_CHAR = "|"


def like_escape(value: str) -> str:
    """Make user text literal inside a LIKE pattern; pair with ESCAPE '|'."""
    esc = LIKE_ESCAPE_CHAR
    return value.replace(esc, esc + esc).replace("%", esc + "%").replace("_", esc + "_")
