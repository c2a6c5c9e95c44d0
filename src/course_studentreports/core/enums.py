from __future__ import annotations

from enum import Enum


class ReportColumn(str, Enum):
    """Report columns a teacher can pick on the list page.

    The value is the display name: it is what the select box posts and what
    ends up in the export header row.
    """

    COURSE_GRADE = "Course grade"
    LAST_ATTENDANCE = "Last date of attendance"
    DAYS_MISSED = "Number of days missed"


class ExportFormat(str, Enum):
    CSV = "csv"
    XLSX = "xlsx"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortColumn(str, Enum):
    """Sortable columns of the participants table."""

    LASTNAME = "lastname"
    FIRSTNAME = "firstname"
    EMAIL = "email"
    LASTACCESS = "lastaccess"
