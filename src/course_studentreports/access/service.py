from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..core.constants import MANAGE_CAPABILITY
from ..core.exceptions import AuthorizationError
from ..core.strings import get_string
from .repository import AccessRepository

logger = logging.getLogger(__name__)


class AccessService:
    """Use case: decide who may see the student reports of a course.

    Only people able to manage activities in the course (teachers, managers)
    and site admins get through.
    """

    def __init__(self, access: AccessRepository, *, site_admin_ids: Iterable[int] = ()):
        self._access = access
        self._site_admins = frozenset(int(u) for u in site_admin_ids)

    def can_manage_course(self, user_id: Optional[int], course_id: int) -> bool:
        if not user_id:
            return False
        if int(user_id) in self._site_admins:
            return True
        return self._access.has_course_capability(
            user_id=int(user_id),
            course_id=int(course_id),
            capability=MANAGE_CAPABILITY,
        )

    def require_course_manager(self, user_id: Optional[int], course_id: int) -> None:
        if not self.can_manage_course(user_id, course_id):
            logger.warning("User %s denied access to student reports of course %s", user_id, course_id)
            raise AuthorizationError(get_string("actionerror"))
