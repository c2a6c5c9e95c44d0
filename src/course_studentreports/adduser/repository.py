from __future__ import annotations

from typing import Protocol, Sequence

from .model import EnrolInstance


class EnrolRepository(Protocol):
    def list_instances(self, course_id: int) -> Sequence[EnrolInstance]:
        """Enrolment instances of the course, in their configured order."""

        raise NotImplementedError
