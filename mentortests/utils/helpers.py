"""
Helper Functions
Utility functions used across the application
"""
from datetime import datetime, timezone
from functools import wraps

from flask import session, g, request

from mentortests.errors import AuthError, ForbiddenError
from mentortests.extensions import db


def now_utc():
    """Get current UTC timestamp"""
    return datetime.now(timezone.utc)


def isoformat(dt):
    """Serialize a stored timestamp as ISO-8601 UTC; None stays None"""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()


def get_current_user():
    """Get current logged-in user"""
    from mentortests.models import User

    user_id = session.get("user_id")
    if user_id is None:
        return None
    return db.session.get(User, user_id)


def parse_body(schema):
    """Validate the JSON body against a pydantic schema"""
    return schema.model_validate(request.get_json(silent=True) or {})


# Decorators
def require_login(f):
    """
    Decorator to require an authenticated user
    The user is available as g.user inside the view
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = get_current_user()
        if user is None:
            raise AuthError()
        g.user = user
        return f(*args, **kwargs)
    return decorated_function


def require_role(role):
    """Decorator factory to require a specific role"""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = get_current_user()
            if user is None:
                raise AuthError()
            if user.role != role:
                raise ForbiddenError(f"Access denied. Only {role}s can access this endpoint.")
            g.user = user
            return f(*args, **kwargs)
        return decorated_function
    return decorator


require_mentor = require_role("mentor")
require_student = require_role("student")
