from __future__ import annotations

from course_studentreports.core.enums import SortColumn, SortDirection
from course_studentreports.database.mysql_base import like_escape
from course_studentreports.participants.model import ParticipantFilter
from course_studentreports.participants.mysql_participant_repository import MySQLParticipantRepository
from course_studentreports.users.mysql_user_repository import MySQLUserRepository


class FakeCursor:
    def __init__(self, executed):
        self._executed = executed

    def execute(self, sql, params=()):
        self._executed.append((sql, params))

    def fetchall(self):
        return []

    def fetchone(self):
        return None

    def close(self):
        pass


class FakeConnection:
    def __init__(self, executed):
        self._executed = executed

    def cursor(self, dictionary=True):
        return FakeCursor(self._executed)

    def commit(self):
        pass

    def rollback(self):
        pass

    def close(self):
        pass


class FakeConnFactory:
    prefix = "mdl_"

    def __init__(self):
        self.executed = []

    def connect(self):
        return FakeConnection(self.executed)


def test_like_escape_makes_wildcards_literal():
    assert like_escape("a_b") == "a|_b"
    assert like_escape("100%") == "100|%"
    assert like_escape("x|y") == "x||y"


def test_user_search_escapes_query_text():
    conn = FakeConnFactory()

    MySQLUserRepository(conn).search_potential(query="a_b", exclude_enrol_id=2, limit=10)

    sql, params = conn.executed[-1]
    assert "mdl_user" in sql
    assert "ESCAPE '|'" in sql
    assert params[1:5] == ("a|_b%",) * 4
    assert params[-1] == 10


def test_user_search_anywhere_wraps_the_escaped_term():
    conn = FakeConnFactory()

    MySQLUserRepository(conn).search_potential(query="50%", exclude_enrol_id=None, limit=5, anywhere=True)

    _, params = conn.executed[-1]
    assert params[1] == "%50|%%"


def test_participant_keywords_are_escaped():
    conn = FakeConnFactory()
    flt = ParticipantFilter(course_id=10, role_id=20, keywords="o_b")

    MySQLParticipantRepository(conn).list(flt, sort=SortColumn.LASTNAME, direction=SortDirection.ASC)

    sql, params = conn.executed[-1]
    assert "ESCAPE '|'" in sql
    assert "%o|_b%" in params
