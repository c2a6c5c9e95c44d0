from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EnrolInstance:
    """An enrolment method configured in a course (manual, self, cohort...)."""

    enrol_id: int
    course_id: int
    enrol: str
    status: int = 0


@dataclass(frozen=True)
class AddOutcome:
    """JSON body returned by the ajax endpoint."""

    success: bool = True
    error: str = ""
    count: int = 0

    def to_dict(self) -> dict:
        return {"success": self.success, "response": {}, "error": self.error, "count": self.count}
