from __future__ import annotations

import pytest

from course_studentreports.access.service import AccessService
from course_studentreports.adduser.model import EnrolInstance
from course_studentreports.adduser.service import AddUsersService
from course_studentreports.attendance.service import AttendanceService
from course_studentreports.container import Container
from course_studentreports.courses.model import Course
from course_studentreports.core.enums import SortColumn, SortDirection
from course_studentreports.courses.service import CourseService
from course_studentreports.grades.model import GradeHistoryEntry, GradeItem
from course_studentreports.grades.service import GradeService
from course_studentreports.main import create_app
from course_studentreports.participants.model import ParticipantRow
from course_studentreports.participants.service import ParticipantsService
from course_studentreports.reports.service import ReportExportService
from course_studentreports.staging.cache import InMemoryBackend
from course_studentreports.staging.service import StagingService
from course_studentreports.users.model import User

TEACHER_ID = 3
STUDENT_ID = 4
INDEX = "/local/course_studentreports/"
ACTION = "/local/course_studentreports/action"
AJAX = "/local/course_studentreports/ajax"
TABLE = "/local/course_studentreports/table"

USERS = {
    5: User(user_id=5, firstname="Alice", lastname="Smith", email="alice@example.com"),
    6: User(user_id=6, firstname="Bob", lastname="Jones", email="bob@example.com"),
    9: User(user_id=9, firstname="Zed", lastname="Zane", email="zed@example.com"),
}
COURSES = {
    1: Course(course_id=1, shortname="site", fullname="Front page"),
    10: Course(course_id=10, shortname="BIO101", fullname="Biology 101"),
}


class FakeCoursesRepo:
    def get_by_id(self, course_id):
        return COURSES.get(int(course_id))


class FakeAccessRepo:
    def has_course_capability(self, *, user_id, course_id, capability):
        return user_id == TEACHER_ID


class FakeUsersRepo:
    def get_by_id(self, user_id):
        return USERS.get(int(user_id))

    def get_by_ids(self, user_ids):
        return [USERS[u] for u in user_ids if u in USERS]

    def search_potential(self, *, query, exclude_enrol_id, limit, anywhere=False):
        return [u for u in USERS.values() if u.lastname.lower().startswith(query.lower())][:limit]


class FakeEnrolRepo:
    def list_instances(self, course_id):
        return [EnrolInstance(enrol_id=2, course_id=course_id, enrol="manual")]


class FakeParticipantsRepo:
    ROWS = [
        ParticipantRow(user_id=5, firstname="Alice", lastname="Smith", email="alice@example.com", lastaccess=None),
        ParticipantRow(user_id=6, firstname="Bob", lastname="Jones", email="bob@example.com", lastaccess=None),
    ]

    def __init__(self):
        self.filters = []
        self.list_calls = []

    def count(self, flt):
        self.filters.append(flt)
        return len(self.ROWS)

    def list(self, flt, *, sort, direction, offset=0, limit=None):
        self.filters.append(flt)
        self.list_calls.append({"sort": sort, "direction": direction, "offset": offset, "limit": limit})
        rows = self.ROWS[offset:]
        return rows[:limit] if limit else rows

    def get_roles(self, *, course_id, user_ids):
        return {u: ("Student",) for u in user_ids}

    def get_lastaccess(self, *, course_id, user_ids):
        return {}


class FakeGradesRepo:
    def get_course_grade_item(self, course_id):
        return GradeItem(item_id=1, course_id=course_id, itemtype="course")

    def get_latest_history(self, *, item_id, user_id):
        if user_id == 5:
            return GradeHistoryEntry(history_id=1, item_id=item_id, user_id=5, finalgrade=91.0, timemodified=1)
        return None


class FakeAttendanceRepo:
    def get_instance_for_course(self, course_id):
        return None


def build_fake_container(participants_repo=None) -> Container:
    users = FakeUsersRepo()
    courses = CourseService(FakeCoursesRepo(), site_id=1)
    staging = StagingService(InMemoryBackend())
    grades = GradeService(FakeGradesRepo())
    attendance = AttendanceService(FakeAttendanceRepo(), timezone="UTC")
    return Container(
        access_service=AccessService(FakeAccessRepo()),
        course_service=courses,
        participants_service=ParticipantsService(participants_repo or FakeParticipantsRepo()),
        staging_service=staging,
        add_users_service=AddUsersService(users, FakeEnrolRepo(), staging),
        grade_service=grades,
        attendance_service=attendance,
        report_service=ReportExportService(users, courses, grades, attendance),
    )


@pytest.fixture()
def app(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(build_fake_container())


@pytest.fixture()
def client(app):
    return app.test_client()


def login(client, user_id=TEACHER_ID):
    with client.session_transaction() as s:
        s["user_id"] = user_id
        s["sesskey"] = "key"
        s["staging_token"] = "tok"


def test_index_requires_login(client):
    resp = client.get(INDEX, query_string={"courseid": 10})

    assert resp.status_code == 403
    assert b"You do not have permission to view this page." in resp.data


def test_index_rejects_users_who_cannot_manage(client):
    login(client, STUDENT_ID)

    resp = client.get(INDEX, query_string={"courseid": 10})

    assert resp.status_code == 403


def test_index_lists_participants(client):
    login(client)

    resp = client.get(INDEX, query_string={"courseid": 10})

    assert resp.status_code == 200
    assert b"2 total users found" in resp.data
    assert b'name="user5"' in resp.data
    assert b"Number of days missed" in resp.data
    assert b"Student reports" in resp.data


def test_index_without_courseid_is_bad_request(client):
    login(client)

    resp = client.get(INDEX)

    assert resp.status_code == 400


def test_site_course_shows_course_prompt(client):
    login(client)

    resp = client.get(INDEX, query_string={"courseid": 1})

    assert resp.status_code == 200
    assert b"Select a course" in resp.data


def test_index_csv_download_lists_participants(client):
    login(client)

    resp = client.get(INDEX, query_string={"courseid": 10, "format": "csv"})

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "student_report.bio101.csv" in resp.headers["Content-Disposition"]
    assert "Alice Smith,alice@example.com,Student,Never" in resp.data.decode("utf-8-sig")


def test_added_users_show_in_table_until_page_reload(client):
    login(client)

    resp = client.post(AJAX, data={"id": 10, "action": "add", "enrolid": 2, "userlist[]": "9", "sesskey": "key"})
    assert resp.status_code == 200
    assert resp.get_json() == {"success": True, "response": {}, "error": "", "count": 1}

    table = client.get(TABLE, query_string={"courseid": 10}).get_json()
    assert table["total"] == 3
    assert [r["id"] for r in table["rows"]] == [5, 6, 9]
    assert table["rows"][2]["staged"] is True

    client.get(INDEX, query_string={"courseid": 10})
    table = client.get(TABLE, query_string={"courseid": 10}).get_json()
    assert table["total"] == 2


def test_ajax_unknown_action(client):
    login(client)

    resp = client.post(AJAX, data={"id": 10, "action": "remove", "sesskey": "key"})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Unknown ajax action"


def test_ajax_rejects_site_course(client):
    login(client)

    resp = client.post(AJAX, data={"id": 1, "action": "add", "enrolid": 2, "sesskey": "key"})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Invalid course"


def test_ajax_requires_sesskey(client):
    login(client)

    resp = client.post(AJAX, data={"id": 10, "action": "add", "enrolid": 2, "userlist[]": "9", "sesskey": "nope"})

    assert resp.status_code == 403


def test_user_search_returns_candidates(client):
    login(client)

    resp = client.get("/local/course_studentreports/adduser/search", query_string={"id": 10, "enrolid": 2, "query": "za"})

    assert [u["id"] for u in resp.get_json()["users"]] == [9]


def test_add_users_form_fragment(client):
    login(client)

    resp = client.get("/local/course_studentreports/adduser/form", query_string={"id": 10})

    assert resp.status_code == 200
    assert b'name="enrolid" value="2"' in resp.data


def test_action_without_post_is_permission_error(client):
    login(client)

    resp = client.get(ACTION)

    assert resp.status_code == 403


def test_action_requires_sesskey(client):
    login(client)

    resp = client.post(ACTION, data={"id": 10, "user5": "1", "formaction[]": "Course grade", "sesskey": "bad"})

    assert resp.status_code == 403


def test_action_exports_selected_columns(client):
    login(client)

    resp = client.post(
        ACTION,
        data={
            "id": 10,
            "sesskey": "key",
            "returnto": "/local/course_studentreports/?courseid=10",
            "user6": "1",
            "user5": "1",
            "formaction[]": ["Last date of attendance", "Course grade"],
        },
    )

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "attachment; filename=studentreports.BIO101." in resp.headers["Content-Disposition"]
    lines = resp.data.decode("utf-8-sig").splitlines()
    assert lines[0] == "First name/Last name,Email address,Last date of attendance,Course grade"
    assert lines[1] == "Bob Jones,bob@example.com,No Data,No Data"
    assert lines[2] == "Alice Smith,alice@example.com,No Data,91.00"


def test_action_xlsx_format(client):
    login(client)

    resp = client.post(
        ACTION,
        data={"id": 10, "sesskey": "key", "user5": "1", "formaction[]": "Course grade", "format": "xlsx"},
    )

    assert resp.status_code == 200
    assert resp.headers["Content-Disposition"].endswith(".xlsx")


def test_action_without_users_goes_back(client):
    login(client)

    resp = client.post(
        ACTION,
        data={
            "id": 10,
            "sesskey": "key",
            "returnto": "/local/course_studentreports/?courseid=10",
            "formaction[]": "Course grade",
        },
    )

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/local/course_studentreports/?courseid=10")


def test_action_ignores_external_returnto(client):
    login(client)

    resp = client.post(
        ACTION,
        data={"id": 10, "sesskey": "key", "returnto": "https://evil.example.com/", "user5": "1"},
    )

    assert resp.status_code == 302
    assert "evil" not in resp.headers["Location"]
    assert "courseid=10" in resp.headers["Location"]


def test_action_rejects_unknown_column(client):
    login(client)

    resp = client.post(ACTION, data={"id": 10, "sesskey": "key", "user5": "1", "formaction[]": "Shoe size"})

    assert resp.status_code == 400


def test_index_csv_uses_the_page_filters_and_sort(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    repo = FakeParticipantsRepo()
    client = create_app(build_fake_container(repo)).test_client()
    login(client)

    resp = client.get(
        INDEX,
        query_string={"courseid": 10, "format": "csv", "tifirst": "z", "tilast": "J",
                      "accesssince": 1000, "keywords": "bob", "sort": "email", "dir": "desc"},
    )

    assert resp.status_code == 200
    flt = repo.filters[-1]
    assert flt.first_initial == "Z"
    assert flt.last_initial == "J"
    assert flt.accesssince == 1000
    assert flt.keywords == "bob"
    assert repo.list_calls[-1]["sort"] == SortColumn.EMAIL
    assert repo.list_calls[-1]["direction"] == SortDirection.DESC
    assert repo.list_calls[-1]["limit"] is None


def test_index_renders_paging_and_sort_links(client):
    login(client)

    resp = client.get(INDEX, query_string={"courseid": 10, "perpage": 1, "sort": "email", "dir": "asc"})
    html = resp.data.decode()

    assert 'class="pagination"' in html
    assert "&amp;page=1" in html
    assert 'name="user5"' in html
    assert 'name="user6"' not in html
    # Clicking the active sort column again flips its direction.
    assert "sort=email&amp;dir=desc" in html
    assert "tifirst=A" in html


def test_index_wires_the_add_users_script(client):
    login(client)

    html = client.get(INDEX, query_string={"courseid": 10}).data.decode()

    assert '<script src="/static/studentreports/adduser.js"></script>' in html
    assert 'data-table-url="/local/course_studentreports/table?courseid=10"' in html
    assert 'data-region="adduser-dialog"' in html


def test_add_users_script_renders_export_checkboxes(client):
    resp = client.get("/static/studentreports/adduser.js")

    assert resp.status_code == 200
    script = resp.data.decode()
    assert "name=\\\"user\" + Number(row.id)" in script
    assert "participants-rows" in script
    resp.close()


def test_staged_user_gets_an_export_checkbox_row(client):
    login(client)
    client.post(AJAX, data={"id": 10, "action": "add", "enrolid": 2, "userlist[]": "9", "sesskey": "key"})

    rows = client.get(TABLE, query_string={"courseid": 10}).get_json()["rows"]

    assert {"id": 9, "staged": True}.items() <= rows[-1].items()

    export = client.post(ACTION, data={"id": 10, "sesskey": "key", "user9": "1", "formaction[]": "Course grade"})
    assert export.data.decode("utf-8-sig").splitlines()[1] == "Zed Zane,zed@example.com,No Data"
