from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_PAGE_SIZE, STUDENT_ROLE_ID
from ..core.enums import SortColumn, SortDirection
from ..core.exceptions import ValidationError
from ..staging.model import StagedUser
from .model import ParticipantFilter, ParticipantRow, ParticipantsPage
from .repository import ParticipantRepository


def parse_sort(value: Optional[str]) -> SortColumn:
    if not value:
        return SortColumn.LASTNAME
    try:
        return SortColumn(value)
    except ValueError:
        raise ValidationError(f"Invalid sort column: {value}")


def parse_direction(value: Optional[str]) -> SortDirection:
    if not value:
        return SortDirection.ASC
    try:
        return SortDirection(value.lower())
    except ValueError:
        raise ValidationError(f"Invalid sort direction: {value}")


class ParticipantsService:
    """Use case: the filtered, paginated student list of a course.

    Staged users (picked in the add-user dialog) are appended to every page
    and counted in the total.
    """

    def __init__(
        self,
        participants: ParticipantRepository,
        *,
        student_role_id: int = STUDENT_ROLE_ID,
        default_per_page: int = DEFAULT_PAGE_SIZE,
    ):
        self._participants = participants
        self._student_role_id = int(student_role_id)
        self._default_per_page = int(default_per_page) or DEFAULT_PAGE_SIZE

    @property
    def default_per_page(self) -> int:
        return self._default_per_page

    def build_filter(
        self,
        course_id: int,
        *,
        keywords: Optional[str] = None,
        accesssince: Optional[int] = None,
        first_initial: Optional[str] = None,
        last_initial: Optional[str] = None,
    ) -> ParticipantFilter:
        return ParticipantFilter(
            course_id=int(course_id),
            role_id=self._student_role_id,
            keywords=(keywords or "").strip() or None,
            accesssince=accesssince or None,
            first_initial=(first_initial or "")[:1].upper() or None,
            last_initial=(last_initial or "")[:1].upper() or None,
        )

    def list_page(
        self,
        flt: ParticipantFilter,
        *,
        page: int = 0,
        per_page: Optional[int] = None,
        sort: SortColumn = SortColumn.LASTNAME,
        direction: SortDirection = SortDirection.ASC,
        staged: Sequence[StagedUser] = (),
    ) -> ParticipantsPage:
        per_page = int(per_page or self._default_per_page)
        if per_page < 0:
            raise ValidationError("perpage must not be negative")
        page = max(int(page or 0), 0)

        total = self._participants.count(flt) + len(staged)
        rows = list(
            self._participants.list(
                flt,
                sort=sort,
                direction=direction,
                offset=page * per_page,
                limit=per_page or None,
            )
        )
        rows = self._merge_staged(flt.course_id, rows, staged)

        return ParticipantsPage(
            rows=self._with_roles(flt.course_id, rows),
            total=total,
            page=page,
            per_page=per_page,
            sort=sort,
            direction=direction,
            staged_count=len(staged),
        )

    def list_all(
        self,
        flt: ParticipantFilter,
        *,
        sort: SortColumn = SortColumn.LASTNAME,
        direction: SortDirection = SortDirection.ASC,
    ) -> list[ParticipantRow]:
        rows = list(self._participants.list(flt, sort=sort, direction=direction))
        return self._with_roles(flt.course_id, rows)

    def _merge_staged(
        self,
        course_id: int,
        rows: list[ParticipantRow],
        staged: Sequence[StagedUser],
    ) -> list[ParticipantRow]:
        if not staged:
            return rows

        seen = {r.user_id for r in rows}
        extra = [s for s in staged if s.user_id not in seen]
        lastaccess = self._participants.get_lastaccess(
            course_id=course_id, user_ids=[s.user_id for s in extra]
        ) if extra else {}

        for s in extra:
            seen.add(s.user_id)
            rows.append(
                ParticipantRow(
                    user_id=s.user_id,
                    firstname=s.firstname,
                    lastname=s.lastname,
                    email=s.email,
                    lastaccess=lastaccess.get(s.user_id),
                    staged=True,
                )
            )
        return rows

    def _with_roles(self, course_id: int, rows: list[ParticipantRow]) -> list[ParticipantRow]:
        if not rows:
            return []
        roles = self._participants.get_roles(course_id=course_id, user_ids=[r.user_id for r in rows])
        return [
            ParticipantRow(
                user_id=r.user_id,
                firstname=r.firstname,
                lastname=r.lastname,
                email=r.email,
                lastaccess=r.lastaccess,
                roles=tuple(roles.get(r.user_id, ())),
                staged=r.staged,
            )
            for r in rows
        ]
