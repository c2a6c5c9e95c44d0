from __future__ import annotations

import logging
from typing import Sequence

from ..core.constants import DEFAULT_MAX_USERS_PER_PAGE
from ..core.exceptions import NotFoundError, ValidationError
from ..core.strings import get_string
from ..staging.model import StagedUser
from ..staging.service import StagingService
from ..users.model import User
from ..users.repository import UserRepository
from .form import AddUsersForm
from .model import AddOutcome, EnrolInstance
from .repository import EnrolRepository

logger = logging.getLogger(__name__)


class AddUsersService:
    """Use case: search users and stage them into the participants table."""

    def __init__(
        self,
        users: UserRepository,
        enrols: EnrolRepository,
        staging: StagingService,
        *,
        max_users_per_page: int = DEFAULT_MAX_USERS_PER_PAGE,
        search_anywhere: bool = False,
    ):
        self._users = users
        self._enrols = enrols
        self._staging = staging
        self._max_users_per_page = int(max_users_per_page)
        self._search_anywhere = bool(search_anywhere)

    @property
    def max_users_per_page(self) -> int:
        return self._max_users_per_page

    def manual_instance(self, course_id: int) -> EnrolInstance:
        for instance in self._enrols.list_instances(int(course_id)):
            if instance.enrol == "manual":
                return instance
        raise ValidationError(get_string("nomanualenrol"))

    def build_form(self, course_id: int) -> AddUsersForm:
        instance = self.manual_instance(course_id)
        return AddUsersForm(course_id=int(course_id), enrol_id=instance.enrol_id)

    def search(self, *, enrol_id: int, query: str) -> Sequence[User]:
        return self._users.search_potential(
            query=query,
            exclude_enrol_id=enrol_id,
            limit=self._max_users_per_page,
            anywhere=self._search_anywhere,
        )

    def add(self, token: str, form: AddUsersForm) -> AddOutcome:
        """Stage the selected users, replacing any earlier selection."""
        errors = form.validate()
        if errors:
            raise ValidationError("; ".join(errors.values()))

        staged: list[StagedUser] = []
        for user_id in form.userlist:
            user = self._users.get_by_id(user_id)
            if user is None:
                raise NotFoundError(f"User {user_id} does not exist")
            staged.append(StagedUser.from_user(user))

        self._staging.stage(token, staged)
        logger.info("Staged %d user(s) for course %s", len(staged), form.course_id)
        return AddOutcome(success=True, count=len(staged))
