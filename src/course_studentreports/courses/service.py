from __future__ import annotations

from ..core.constants import SITE_ID
from ..core.exceptions import NotFoundError, ValidationError
from ..core.strings import get_string
from .model import Course
from .repository import CourseRepository


class CourseService:
    def __init__(self, courses: CourseRepository, *, site_id: int = SITE_ID):
        self._courses = courses
        self._site_id = int(site_id)

    def is_site(self, course_id: int) -> bool:
        return int(course_id) == self._site_id

    def get_course(self, course_id: int) -> Course:
        course = self._courses.get_by_id(int(course_id))
        if not course:
            raise NotFoundError(f"Course {course_id} does not exist")
        return course

    def get_report_course(self, course_id: int) -> Course:
        """Like get_course, but the site front page is not a course you can report on."""
        if self.is_site(course_id):
            raise ValidationError(get_string("invalidcourse"))
        return self.get_course(course_id)
