from __future__ import annotations

import pytest

from course_studentreports.core.enums import SortColumn, SortDirection
from course_studentreports.core.exceptions import ValidationError
from course_studentreports.participants.model import ParticipantRow
from course_studentreports.participants.service import ParticipantsService, parse_direction, parse_sort
from course_studentreports.staging.model import StagedUser


class FakeParticipantsRepo:
    def __init__(self, rows, roles=None, lastaccess=None):
        self._rows = list(rows)
        self._roles = roles or {}
        self._lastaccess = lastaccess or {}
        self.last_filter = None
        self.last_list_args = None

    def count(self, flt):
        self.last_filter = flt
        return len(self._rows)

    def list(self, flt, *, sort, direction, offset=0, limit=None):
        self.last_list_args = {"sort": sort, "direction": direction, "offset": offset, "limit": limit}
        rows = self._rows[offset:]
        return rows[:limit] if limit else rows

    def get_roles(self, *, course_id, user_ids):
        return {u: self._roles.get(u, ("Student",)) for u in user_ids}

    def get_lastaccess(self, *, course_id, user_ids):
        return {u: self._lastaccess[u] for u in user_ids if u in self._lastaccess}


def row(user_id, first, last):
    return ParticipantRow(user_id=user_id, firstname=first, lastname=last, email=f"{first.lower()}@example.com")


ROWS = [row(1, "Ann", "Adams"), row(2, "Ben", "Brown"), row(3, "Cat", "Cole")]


def test_page_is_sliced_and_roles_filled():
    repo = FakeParticipantsRepo(ROWS, roles={2: ("Student", "Non-editing teacher")})
    svc = ParticipantsService(repo, student_role_id=20, default_per_page=2)

    page = svc.list_page(svc.build_filter(10), page=1)

    assert [r.user_id for r in page.rows] == [3]
    assert page.total == 3
    assert page.page_count == 2
    assert page.rows[0].roles == ("Student",)
    assert repo.last_filter.role_id == 20


def test_staged_users_are_appended_and_counted():
    repo = FakeParticipantsRepo(ROWS, lastaccess={9: 1700000000})
    svc = ParticipantsService(repo, default_per_page=20)
    staged = [
        StagedUser(user_id=9, firstname="Zed", lastname="Zane", email="zed@example.com"),
        StagedUser(user_id=8, firstname="Yan", lastname="Yu", email="yan@example.com"),
    ]

    page = svc.list_page(svc.build_filter(10), staged=staged)

    assert [r.user_id for r in page.rows] == [1, 2, 3, 9, 8]
    assert page.total == 5
    assert page.staged_count == 2
    assert page.rows[3].staged is True
    assert page.rows[3].lastaccess == 1700000000
    assert page.rows[4].lastaccess is None
    assert page.rows[4].roles == ("Student",)


def test_staged_user_already_listed_is_not_duplicated():
    svc = ParticipantsService(FakeParticipantsRepo(ROWS))
    staged = [StagedUser(user_id=2, firstname="Ben", lastname="Brown", email="ben@example.com")]

    page = svc.list_page(svc.build_filter(10), staged=staged)

    assert [r.user_id for r in page.rows] == [1, 2, 3]


def test_zero_per_page_falls_back_to_default():
    svc = ParticipantsService(FakeParticipantsRepo(ROWS), default_per_page=0)

    assert svc.default_per_page == 20


def test_filter_is_normalised():
    svc = ParticipantsService(FakeParticipantsRepo([]))

    flt = svc.build_filter(10, keywords="  ", first_initial="ab", last_initial="")

    assert flt.keywords is None
    assert flt.first_initial == "A"
    assert flt.last_initial is None


def test_sort_and_direction_are_forwarded():
    repo = FakeParticipantsRepo(ROWS)
    svc = ParticipantsService(repo)

    svc.list_page(svc.build_filter(10), sort=parse_sort("email"), direction=parse_direction("DESC"))

    assert repo.last_list_args["sort"] == SortColumn.EMAIL
    assert repo.last_list_args["direction"] == SortDirection.DESC


def test_bad_sort_is_rejected():
    with pytest.raises(ValidationError):
        parse_sort("password")
