from __future__ import annotations

import logging

from flask import Flask, jsonify, render_template, request

from ..access.guards import current_user_id, login_required, require_sesskey, sesskey, staging_token
from ..common.validators import required_int
from ..container import Container
from ..core.exceptions import RequiredParameterError
from ..core.strings import get_string
from .form import AddUsersForm
from .model import AddOutcome

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.add_users_service

    def _report_course(course_id: int):
        course = container.course_service.get_report_course(course_id)
        container.access_service.require_course_manager(current_user_id(), course.course_id)
        return course

    @app.route("/local/course_studentreports/adduser/form", methods=["GET"], endpoint="studentreports_adduser_form")
    @login_required
    def add_users_form():
        course = _report_course(required_int(request.args, "id"))
        form = service.build_form(course.course_id)
        return render_template(
            "studentreports/add_users_form.html",
            form=form.definition(max_users_per_page=service.max_users_per_page),
            sesskey=sesskey(),
        )

    @app.route("/local/course_studentreports/adduser/search", methods=["GET"], endpoint="studentreports_adduser_search")
    @login_required
    def search_users():
        course = _report_course(required_int(request.args, "id"))
        enrol_id = required_int(request.args, "enrolid")
        users = service.search(enrol_id=enrol_id, query=request.args.get("query", ""))
        return jsonify({
            "courseid": course.course_id,
            "users": [
                {"id": u.user_id, "fullname": u.fullname, "email": u.email}
                for u in users
            ],
        })

    @app.route("/local/course_studentreports/ajax", methods=["POST"], endpoint="studentreports_ajax")
    @login_required
    def ajax():
        course_id = required_int(request.form, "id")
        action = (request.form.get("action") or "").strip()
        if not action:
            raise RequiredParameterError("action")

        course = _report_course(course_id)
        require_sesskey(request.form.get("sesskey"))

        if action != "add":
            logger.info("Unknown ajax action %r for course %s", action, course.course_id)
            outcome = AddOutcome(success=False, error=get_string("unknownajaxaction"))
            return jsonify(outcome.to_dict()), 400

        form = AddUsersForm.from_request(request.form)
        outcome = service.add(staging_token(), form)
        return jsonify(outcome.to_dict())
