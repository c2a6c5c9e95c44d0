"""Plugin strings (English)."""
from __future__ import annotations

from typing import Any, Mapping, Optional

STRINGS: dict[str, str] = {
    # Index strings.
    "pluginname": "Course Student Reports",
    "nav_course_studentreports": "Student reports",
    "course_studentreports_courseheading": "Student reports: {a}",
    "course_studentreports_participantsfound": "{a} total users found",
    "withselectedusers": "Select reports to generate with selected users...",
    "csvdownload": "Download .csv",
    "adduser": "Add students",
    "selectcourse": "Select a course to generate a report for.",
    # Name of reports.
    "coursegradeoption": "Course grade",
    "lastattendanceoption": "Last date of attendance",
    "daysmissedoption": "Number of days missed",
    # Action strings.
    "studentnametitle": "First name/Last name",
    "studentemailtitle": "Email address",
    "nodata": "No Data",
    "csvfilename": "studentreports.{shortname}.{time}",
    "participantsfilename": "student_report.{shortname}",
    # Table headers.
    "fullname": "Full name",
    "email": "Email address",
    "roles": "Roles",
    "lastcourseaccess": "Last access to course",
    "never": "Never",
    # Error strings.
    "actionerror": "You do not have permission to view this page.",
    "invalidcourse": "Invalid course",
    "invalidsesskey": "Your session has most likely timed out. Please log in again.",
    "unknownajaxaction": "Unknown ajax action",
    "unknownreport": "Unknown report: {a}",
    "nomanualenrol": "The course has no manual enrolment instance",
    "enroltimeendinvalid": "The enrolment end date must be after the enrolment start date",
    # Modal strings.
    "studentselect": "Student selection",
    "selectusers": "Select users",
    "totalusers": "{a} user(s) added",
    # Cache strings.
    "cachedef_userids": "Stores userids from the user selector to add to the dynamic table.",
}


def get_string(key: str, a: Optional[Any] = None) -> str:
    """Look up a string and fill its placeholders.

    A mapping fills named placeholders, anything else fills ``{a}``.
    """

    template = STRINGS[key]
    if a is None:
        return template
    if isinstance(a, Mapping):
        return template.format(**a)
    return template.format(a=a)
