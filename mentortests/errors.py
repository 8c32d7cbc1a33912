"""
API Errors
Exception taxonomy for the attempt lifecycle and the JSON handlers that
translate them at the request boundary
"""
from flask import jsonify, current_app
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from mentortests.extensions import db


class ApiError(Exception):
    """Base error carrying the HTTP status it maps to"""
    status_code = 500
    default_message = "Request failed"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


# ---------- 404 ----------

class NotFoundError(ApiError):
    status_code = 404
    default_message = "Not found"


class TestNotFoundError(NotFoundError):
    default_message = "Test not found"


class QuestionNotFoundError(NotFoundError):
    default_message = "Question not found in this test"


class AttemptNotFoundError(NotFoundError):
    default_message = "Test attempt not found or already completed. Please start the test again."


# ---------- 400 ----------

class InvalidInputError(ApiError):
    status_code = 400
    default_message = "Invalid input"


class InvalidScoreError(InvalidInputError):
    default_message = "Score must be a number"


class StateConflictError(ApiError):
    status_code = 400
    default_message = "Operation not allowed in the current attempt state"


class CompletedAttemptError(StateConflictError):
    default_message = "Cannot submit answer to a completed test"


# ---------- 401 / 403 ----------

class AuthError(ApiError):
    status_code = 401
    default_message = "Authentication required"


class ForbiddenError(ApiError):
    status_code = 403
    default_message = "Access denied"


def _validation_message(exc):
    """First pydantic error as 'field: reason'"""
    errors = exc.errors()
    if not errors:
        return "Invalid input"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    reason = first.get("msg", "invalid value")
    return f"{field}: {reason}" if field else reason


def register_error_handlers(app):
    """Attach JSON error handlers to the app"""

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        current_app.logger.info("%s: %s", type(error).__name__, error.message)
        return jsonify({"success": False, "message": error.message}), error.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return jsonify({"success": False, "message": _validation_message(error)}), 400

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        current_app.logger.exception("Database error")
        return jsonify({"success": False, "message": "Database error"}), 500
