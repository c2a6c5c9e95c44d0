import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "moodle_test"),
}
TABLE_PREFIX = "mdl_"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

SITE_ID = 1
SITE_ADMIN_IDS = (2,)
STUDENT_ROLE_ID = 20

PARTICIPANTS_PER_PAGE = 20
MAX_USERS_PER_PAGE = 100
SEARCH_ANYWHERE = False
GRADE_DECIMALS = 2
TIMEZONE = "UTC"

STAGING_CACHE_BACKEND = "memory"
STAGING_CACHE_TTL = 1800
REDIS_URL = None
