from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .access.mysql_access_repository import MySQLAccessRepository
from .access.service import AccessService
from .adduser.mysql_enrol_repository import MySQLEnrolRepository
from .adduser.service import AddUsersService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core import constants
from .courses.mysql_course_repository import MySQLCourseRepository
from .courses.service import CourseService
from .database.connection import DBConfig, DatabaseConnection
from .grades.mysql_grade_repository import MySQLGradeRepository
from .grades.service import GradeService
from .participants.mysql_participant_repository import MySQLParticipantRepository
from .participants.service import ParticipantsService
from .reports.service import ReportExportService
from .staging.cache import build_cache
from .staging.service import StagingService
from .users.mysql_user_repository import MySQLUserRepository


@dataclass(frozen=True)
class Container:
    access_service: AccessService
    course_service: CourseService
    participants_service: ParticipantsService
    staging_service: StagingService
    add_users_service: AddUsersService
    grade_service: GradeService
    attendance_service: AttendanceService
    report_service: ReportExportService

    conn: Optional[DatabaseConnection] = None


def build_container(*, db_config: dict, settings: Mapping[str, Any]) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        prefix=str(settings.get("TABLE_PREFIX", "mdl_")),
    )
    conn = DatabaseConnection.get_instance(config)

    users_repo = MySQLUserRepository(conn)
    courses_repo = MySQLCourseRepository(conn)
    access_repo = MySQLAccessRepository(conn)
    enrol_repo = MySQLEnrolRepository(conn)
    participants_repo = MySQLParticipantRepository(conn)
    grades_repo = MySQLGradeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    access_service = AccessService(access_repo, site_admin_ids=settings.get("SITE_ADMIN_IDS", ()))
    course_service = CourseService(courses_repo, site_id=int(settings.get("SITE_ID", constants.SITE_ID)))
    participants_service = ParticipantsService(
        participants_repo,
        student_role_id=int(settings.get("STUDENT_ROLE_ID", constants.STUDENT_ROLE_ID)),
        default_per_page=int(settings.get("PARTICIPANTS_PER_PAGE") or constants.DEFAULT_PAGE_SIZE),
    )
    staging_service = StagingService(
        build_cache(
            backend=str(settings.get("STAGING_CACHE_BACKEND", "memory")),
            ttl_seconds=int(settings.get("STAGING_CACHE_TTL", constants.DEFAULT_STAGING_TTL)),
            redis_url=settings.get("REDIS_URL"),
        )
    )
    add_users_service = AddUsersService(
        users_repo,
        enrol_repo,
        staging_service,
        max_users_per_page=int(settings.get("MAX_USERS_PER_PAGE", constants.DEFAULT_MAX_USERS_PER_PAGE)),
        search_anywhere=bool(settings.get("SEARCH_ANYWHERE", False)),
    )
    grade_service = GradeService(
        grades_repo, decimals=int(settings.get("GRADE_DECIMALS", constants.DEFAULT_GRADE_DECIMALS))
    )
    attendance_service = AttendanceService(attendance_repo, timezone=settings.get("TIMEZONE"))
    report_service = ReportExportService(users_repo, course_service, grade_service, attendance_service)

    return Container(
        access_service=access_service,
        course_service=course_service,
        participants_service=participants_service,
        staging_service=staging_service,
        add_users_service=add_users_service,
        grade_service=grade_service,
        attendance_service=attendance_service,
        report_service=report_service,
        conn=conn,
    )
