"""The "Add students" dialog form.

The form only ever stages users for display; nobody gets enrolled.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from werkzeug.datastructures import MultiDict

from ..common.validators import optional_int, required_int
from ..core.exceptions import ValidationError
from ..core.strings import get_string


def _parse_sequence(values: list[str]) -> list[int]:
    """Accept both repeated fields and comma separated sequences ("3,4,5")."""
    ids: list[int] = []
    for value in values:
        for part in str(value).split(","):
            part = part.strip()
            if not part:
                continue
            if not part.isdigit():
                raise ValidationError(f"Invalid user id: {part}")
            ids.append(int(part))
    return ids


@dataclass
class AddUsersForm:
    course_id: int
    enrol_id: int
    action: str = "add"
    userlist: list[int] = field(default_factory=list)
    startdate: Optional[int] = None
    timeend: Optional[int] = None

    @classmethod
    def from_request(cls, form: MultiDict) -> "AddUsersForm":
        userlist = _parse_sequence(form.getlist("userlist[]") + form.getlist("userlist"))
        userid = optional_int(form, "userid", 0)
        if userid:
            userlist.append(userid)

        return cls(
            course_id=required_int(form, "id"),
            enrol_id=required_int(form, "enrolid"),
            action=(form.get("action") or "add").strip(),
            userlist=list(dict.fromkeys(userlist)),
            startdate=optional_int(form, "startdate"),
            timeend=optional_int(form, "timeend"),
        )

    def validate(self) -> dict[str, str]:
        """Return {field: message}; empty when the form is OK."""
        errors: dict[str, str] = {}
        if self.startdate and self.timeend and self.startdate >= self.timeend:
            errors["timeend"] = get_string("enroltimeendinvalid")
        return errors

    def definition(self, *, max_users_per_page: int) -> dict:
        """Everything the form template needs to draw the dialog."""
        return {
            "header": get_string("studentselect"),
            "title": get_string("adduser"),
            "userlist": {
                "label": get_string("selectusers"),
                "multiple": True,
                "courseid": self.course_id,
                "enrolid": self.enrol_id,
                "perpage": int(max_users_per_page),
                "userfields": ["email"],
            },
            "hidden": {"id": self.course_id, "action": self.action, "enrolid": self.enrol_id},
        }
