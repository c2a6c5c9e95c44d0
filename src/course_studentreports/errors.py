"""Translate domain exceptions into HTTP responses."""
from __future__ import annotations

import logging

from flask import Flask, jsonify, render_template, request
from werkzeug.exceptions import HTTPException

from .core.exceptions import AuthorizationError, CacheError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _wants_json() -> bool:
    if request.is_json or request.path.endswith(("/ajax", "/table", "/search")):
        return True
    best = request.accept_mimetypes.best_match(["application/json", "text/html"])
    return best == "application/json" and request.accept_mimetypes[best] > request.accept_mimetypes["text/html"]


def _respond(message: str, status: int):
    if _wants_json():
        return jsonify({"success": False, "response": {}, "error": message, "count": 0}), status
    template = "403.html" if status == 403 else "error.html"
    return render_template(template, message=message, status=status), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AuthorizationError)
    def handle_authorization_error(e: AuthorizationError):
        logger.info("Permission denied on %s: %s", request.path, e)
        return _respond(str(e), 403)

    # RequiredParameterError is a ValidationError.
    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        logger.info("Bad request on %s: %s", request.path, e)
        return _respond(str(e), 400)

    @app.errorhandler(NotFoundError)
    def handle_not_found(e: NotFoundError):
        return _respond(str(e), 404)

    @app.errorhandler(CacheError)
    def handle_cache_error(e: CacheError):
        logger.exception("Staging cache failure on %s", request.path)
        return _respond(str(e), 503)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error on %s", request.path)
        return _respond("Internal server error", 500)
