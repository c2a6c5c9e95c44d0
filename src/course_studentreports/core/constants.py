"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PAGE_SIZE = 20
DEFAULT_MAX_USERS_PER_PAGE = 100

SITE_ID = 1
GUEST_USER_ID = 1
SYSTEM_CONTEXT_ID = 1
COURSE_CONTEXT_LEVEL = 50

# Role id of "student" on the host site this plugin was written for.
STUDENT_ROLE_ID = 20

MANAGE_CAPABILITY = "moodle/course:manageactivities"
CAP_ALLOW = 1

PRESENT_STATUSES = ("Present", "Late")
ABSENT_ACRONYM = "A"

DATE_FORMAT = "%m/%d/%Y"
DEFAULT_GRADE_DECIMALS = 2

STAGING_CACHE_KEY = "users"
DEFAULT_STAGING_TTL = 1800
