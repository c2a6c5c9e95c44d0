import os

from config import _int_list

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "moodle"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "moodle"),
}
TABLE_PREFIX = os.getenv("TABLE_PREFIX", "mdl_")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

SITE_ID = int(os.getenv("SITE_ID", "1"))
SITE_ADMIN_IDS = _int_list(os.getenv("SITE_ADMIN_IDS", ""))
STUDENT_ROLE_ID = int(os.getenv("STUDENT_ROLE_ID", "20"))

PARTICIPANTS_PER_PAGE = int(os.getenv("PARTICIPANTS_PER_PAGE", "20"))
MAX_USERS_PER_PAGE = int(os.getenv("MAX_USERS_PER_PAGE", "100"))
SEARCH_ANYWHERE = bool(int(os.getenv("SEARCH_ANYWHERE", "0")))
GRADE_DECIMALS = int(os.getenv("GRADE_DECIMALS", "2"))
TIMEZONE = os.getenv("TIMEZONE") or None

STAGING_CACHE_BACKEND = os.getenv("STAGING_CACHE_BACKEND", "redis")
STAGING_CACHE_TTL = int(os.getenv("STAGING_CACHE_TTL", "1800"))
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
