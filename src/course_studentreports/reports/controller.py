from __future__ import annotations

import logging
import re
from typing import Optional

from flask import Flask, redirect, request, url_for

from ..access.guards import current_user_id, login_required, require_sesskey
from ..common.validators import is_local_url, optional_int
from ..container import Container
from ..core.enums import ExportFormat
from ..core.exceptions import AuthorizationError, ValidationError
from ..core.strings import get_string
from .service import parse_columns
from .writer import render

logger = logging.getLogger(__name__)

_USER_KEY = re.compile(r"^user(\d+)$")


def _selected_user_ids(form) -> list[int]:
    """Checkbox names look like user123; keep submission order."""
    ids: list[int] = []
    for key in form.keys():
        m = _USER_KEY.match(key)
        if m:
            ids.append(int(m.group(1)))
    return ids


def _export_format(value: Optional[str]) -> ExportFormat:
    if not value:
        return ExportFormat.CSV
    try:
        return ExportFormat(value.lower())
    except ValueError:
        raise ValidationError(f"Unsupported export format: {value}")


def register(app: Flask, container: Container) -> None:
    def _back(course_id: Optional[int]):
        returnto = request.form.get("returnto")
        if is_local_url(returnto):
            return redirect(returnto)
        if course_id:
            return redirect(url_for("studentreports_index", courseid=course_id))
        return redirect("/")

    @app.route("/local/course_studentreports/action", methods=["GET", "POST"], endpoint="studentreports_action")
    @login_required
    def action():
        # Only ever reached by submitting the participants form.
        if request.method != "POST" or not request.form:
            raise AuthorizationError(get_string("actionerror"))
        require_sesskey(request.form.get("sesskey"))

        course_id = optional_int(request.form, "id")
        if not course_id:
            return _back(None)

        container.access_service.require_course_manager(current_user_id(), course_id)

        user_ids = _selected_user_ids(request.form)
        columns = parse_columns(request.form.getlist("formaction[]") + request.form.getlist("formaction"))
        if not user_ids or not columns:
            return _back(course_id)

        fmt = _export_format(request.form.get("format"))
        data = container.report_service.build_export(course_id, user_ids, columns)
        payload, mimetype, download_name = render(data, fmt)

        return app.response_class(
            payload,
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={download_name}"},
        )
