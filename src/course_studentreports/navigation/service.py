from __future__ import annotations

import logging
from typing import Optional

from ..access.service import AccessService
from ..core.strings import get_string
from ..courses.model import Course
from .model import NavigationNode, NodeType

logger = logging.getLogger(__name__)

REPORTS_NODE_KEY = "coursereports"
LINK_NODE_KEY = "studentreports-link"
LINK_ICON = "i/report"


def build_course_navigation(course: Course) -> NavigationNode:
    """The bare course tree the host hands to plugins: a root and its Reports container."""
    root = NavigationNode(key=f"course-{course.course_id}", text=course.fullname)
    root.add("Reports", type=NodeType.CONTAINER, key=REPORTS_NODE_KEY)
    return root


def extend_course_navigation(
    root: NavigationNode,
    *,
    user_id: Optional[int],
    course: Course,
    access: AccessService,
    url: str,
) -> Optional[NavigationNode]:
    """Hang the "Student reports" link under the course Reports node for teachers."""
    if not user_id:
        return None
    if not access.can_manage_course(user_id, course.course_id):
        return None

    reports = root.find(REPORTS_NODE_KEY, NodeType.CONTAINER)
    if reports is None:
        logger.debug("Course %s has no reports node", course.course_id)
        return None

    return reports.add(
        get_string("nav_course_studentreports"),
        url,
        NodeType.CUSTOM,
        key=LINK_NODE_KEY,
        icon=LINK_ICON,
    )
