"""
Error kinds surfaced by the JSON API.

Handlers raise ``ApiError`` subclasses; ``register_error_handlers`` turns
them, werkzeug HTTP errors and anything unexpected into a JSON body of the
form ``{"error": ..., "kind": ...}``.
"""

import enum
import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from models import db

logger = logging.getLogger(__name__)


class ErrorKind(enum.Enum):
    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"

    @property
    def status_code(self):
        return _STATUS_CODES[self]

    @classmethod
    def from_status(cls, status_code):
        for kind, code in _STATUS_CODES.items():
            if code == status_code:
                return kind
        if status_code is not None and 400 <= status_code < 500:
            return cls.VALIDATION
        return cls.INTERNAL


_STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}


class ApiError(Exception):
    kind = ErrorKind.INTERNAL

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        body = {"error": self.message, "kind": self.kind.value}
        if self.details:
            body["details"] = self.details
        return body


class ValidationFailed(ApiError):
    kind = ErrorKind.VALIDATION

    @classmethod
    def from_form(cls, form, message="Validation failed"):
        return cls(message, details=form.errors)


class AuthRequired(ApiError):
    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message="Unauthorized", details=None):
        super().__init__(message, details)


class EntityNotFound(ApiError):
    kind = ErrorKind.NOT_FOUND


class UploadFailed(ApiError):
    kind = ErrorKind.INTERNAL


def error_response(kind, message, details=None):
    body = {"error": message, "kind": kind.value}
    if details:
        body["details"] = details
    return jsonify(body), kind.status_code


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        if error.kind is ErrorKind.INTERNAL:
            db.session.rollback()
            logger.error("%s: %s", type(error).__name__, error.message)
        return jsonify(error.to_dict()), error.kind.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        kind = ErrorKind.from_status(error.code)
        return error_response(kind, error.description)[0], error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        db.session.rollback()
        logger.exception("Unhandled error")
        return error_response(ErrorKind.INTERNAL, str(error) or "Internal server error")
