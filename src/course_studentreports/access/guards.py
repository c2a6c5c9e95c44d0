"""Request guards shared by the controllers.

Login itself belongs to the host platform; we only read the user id it
leaves in the session.
"""
from __future__ import annotations

import secrets
from functools import wraps
from typing import Optional

from flask import session

from ..core.exceptions import AuthorizationError
from ..core.strings import get_string


def current_user_id() -> Optional[int]:
    user_id = session.get("user_id")
    return int(user_id) if user_id else None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user_id() is None:
            raise AuthorizationError(get_string("actionerror"))
        return view(*args, **kwargs)

    return wrapper


def sesskey() -> str:
    """Per-session token rendered into forms and checked on POSTs."""
    key = session.get("sesskey")
    if not key:
        key = secrets.token_urlsafe(16)
        session["sesskey"] = key
    return key


def require_sesskey(value: Optional[str]) -> None:
    expected = session.get("sesskey")
    if not expected or not value or not secrets.compare_digest(str(expected), str(value)):
        raise AuthorizationError(get_string("invalidsesskey"))


def staging_token() -> str:
    """Identifies this browser session in the staging cache."""
    token = session.get("staging_token")
    if not token:
        token = secrets.token_hex(16)
        session["staging_token"] = token
    return token
