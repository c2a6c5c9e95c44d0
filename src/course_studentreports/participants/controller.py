from __future__ import annotations

import csv
import io
import logging
import string

from flask import Flask, jsonify, render_template, request, url_for

from ..access.guards import current_user_id, login_required, sesskey, staging_token
from ..common.datetime_utils import format_time_ago, now_timestamp
from ..common.validators import clean_filename, optional_alpha, optional_int, required_int
from ..container import Container
from ..core.enums import ReportColumn, SortColumn, SortDirection
from ..core.strings import get_string
from ..navigation.service import build_course_navigation, extend_course_navigation
from .model import ParticipantFilter, ParticipantRow, ParticipantsPage
from .service import parse_direction, parse_sort

logger = logging.getLogger(__name__)

URL_PREFIX = "/local/course_studentreports"


def _lastaccess_text(row: ParticipantRow, now: int) -> str:
    if not row.lastaccess:
        return get_string("never")
    return format_time_ago(now - int(row.lastaccess))


def _row_dict(row: ParticipantRow, now: int) -> dict:
    return {
        "id": row.user_id,
        "fullname": row.fullname,
        "email": row.email,
        "roles": list(row.roles),
        "lastaccess": _lastaccess_text(row, now),
        "staged": row.staged,
    }


def _query_args() -> dict:
    """Current list parameters, without the download switch."""
    return {k: v for k, v in request.args.items() if k != "format"}


def _paging_links(page: ParticipantsPage) -> dict:
    base = _query_args()

    def url(**overrides) -> str:
        return url_for("studentreports_index", **{**base, **overrides})

    sort_links = {}
    for column in SortColumn:
        flip = page.sort == column and page.direction == SortDirection.ASC
        direction = SortDirection.DESC if flip else SortDirection.ASC
        sort_links[column.value] = url(sort=column.value, dir=direction.value, page=0)

    return {
        "pages": [
            {"number": n + 1, "url": url(page=n), "current": n == page.page}
            for n in range(page.page_count)
        ],
        "sort": sort_links,
        "firstinitial": [(letter, url(tifirst=letter, page=0)) for letter in string.ascii_uppercase],
        "lastinitial": [(letter, url(tilast=letter, page=0)) for letter in string.ascii_uppercase],
        "allfirst": url(tifirst="", page=0),
        "alllast": url(tilast="", page=0),
        "csv": url(format="csv"),
    }


def register(app: Flask, container: Container) -> None:
    participants = container.participants_service

    def _filter(course_id: int) -> ParticipantFilter:
        args = request.args
        return participants.build_filter(
            course_id,
            keywords=args.get("keywords"),
            accesssince=optional_int(args, "accesssince"),
            first_initial=optional_alpha(args, "tifirst"),
            last_initial=optional_alpha(args, "tilast"),
        )

    def _load_page(course_id: int, staged) -> ParticipantsPage:
        args = request.args
        return participants.list_page(
            _filter(course_id),
            page=optional_int(args, "page", 0),
            per_page=optional_int(args, "perpage") or participants.default_per_page,
            sort=parse_sort(args.get("sort")),
            direction=parse_direction(args.get("dir")),
            staged=staged,
        )

    def _participants_csv(course, rows: list[ParticipantRow]):
        now = now_timestamp()
        out = io.StringIO()
        writer = csv.writer(out)
        writer.writerow([
            get_string("fullname"),
            get_string("email"),
            get_string("roles"),
            get_string("lastcourseaccess"),
        ])
        for row in rows:
            writer.writerow([row.fullname, row.email, ", ".join(row.roles), _lastaccess_text(row, now)])

        filename = clean_filename(get_string("participantsfilename", {"shortname": course.shortname.lower()}))
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}.csv"},
        )

    @app.route(f"{URL_PREFIX}/", methods=["GET"], endpoint="studentreports_index")
    @login_required
    def index():
        course_id = required_int(request.args, "courseid")
        user_id = current_user_id()

        if container.course_service.is_site(course_id):
            return render_template("studentreports/index.html", course=None, message=get_string("selectcourse"))

        course = container.course_service.get_course(course_id)
        container.access_service.require_course_manager(user_id, course.course_id)

        # A fresh page load starts with an empty selection.
        token = staging_token()
        container.staging_service.clear(token)

        if optional_alpha(request.args, "format") == "csv":
            rows = participants.list_all(
                _filter(course.course_id),
                sort=parse_sort(request.args.get("sort")),
                direction=parse_direction(request.args.get("dir")),
            )
            return _participants_csv(course, rows)

        page = _load_page(course.course_id, staged=())

        nav = build_course_navigation(course)
        extend_course_navigation(
            nav,
            user_id=user_id,
            course=course,
            access=container.access_service,
            url=url_for("studentreports_index", courseid=course.course_id),
        )
        reports_node = nav.find("coursereports")

        now = now_timestamp()
        return render_template(
            "studentreports/index.html",
            course=course,
            heading=get_string("course_studentreports_courseheading", course.fullname),
            title=f"{course.shortname}: {get_string('nav_course_studentreports')}",
            page=page,
            rows=[_row_dict(r, now) for r in page.rows],
            participants_found=get_string("course_studentreports_participantsfound", page.total),
            report_options=[c.value for c in ReportColumn],
            report_links=reports_node.children if reports_node else [],
            sesskey=sesskey(),
            returnto=request.full_path,
            links=_paging_links(page),
            table_url=url_for("studentreports_table", **_query_args()),
            strings={
                "withselectedusers": get_string("withselectedusers"),
                "csvdownload": get_string("csvdownload"),
                "adduser": get_string("adduser"),
                "fullname": get_string("fullname"),
                "email": get_string("email"),
                "roles": get_string("roles"),
                "lastcourseaccess": get_string("lastcourseaccess"),
            },
        )

    @app.route(f"{URL_PREFIX}/table", methods=["GET"], endpoint="studentreports_table")
    @login_required
    def table():
        course_id = required_int(request.args, "courseid")
        course = container.course_service.get_report_course(course_id)
        container.access_service.require_course_manager(current_user_id(), course.course_id)

        staged = container.staging_service.staged(staging_token())
        page = _load_page(course.course_id, staged=staged)

        now = now_timestamp()
        return jsonify({
            "rows": [_row_dict(r, now) for r in page.rows],
            "total": page.total,
            "page": page.page,
            "perpage": page.per_page,
            "pagecount": page.page_count,
            "participantsfound": get_string("course_studentreports_participantsfound", page.total),
        })
