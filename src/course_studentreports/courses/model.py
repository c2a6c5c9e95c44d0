from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Course:
    """Course record of the host platform (read-only)."""

    course_id: int
    shortname: str
    fullname: str
