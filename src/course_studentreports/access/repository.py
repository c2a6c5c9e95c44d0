from __future__ import annotations

from typing import Protocol


class AccessRepository(Protocol):
    def has_course_capability(self, *, user_id: int, course_id: int, capability: str) -> bool:
        """True when a role the user holds in the course (or system) context grants the capability."""

        raise NotImplementedError
