"""
Route authorization.

Page routes are split into an admin group and a user group. Every request
goes through ``guard_pages``: paths outside both groups pass untouched, a
missing or unreadable session goes to the login page, and a session whose
role does not own the group goes to that role's own landing page.

JSON handlers use ``require_role`` instead, which answers 401 rather than
redirecting.
"""

import logging
from functools import wraps

from flask import redirect, request, session

from errors import AuthRequired
from models import ROLE_ADMIN, ROLE_USER, ROLES

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"

ADMIN_ROUTES = ("/dashboard", "/addjobs", "/seeapplication", "/editjobs")
USER_ROUTES = ("/user-dashboard", "/alljobs")

LANDING_PAGES = {
    ROLE_ADMIN: "/dashboard",
    ROLE_USER: "/user-dashboard",
}

SESSION_KEYS = ("id", "name", "email", "role")


def _matches(path, routes):
    return any(path == route or path.startswith(route + "/") for route in routes)


def required_role(path):
    """Role that owns ``path``, or None for unprotected paths."""
    if _matches(path, ADMIN_ROUTES):
        return ROLE_ADMIN
    if _matches(path, USER_ROUTES):
        return ROLE_USER
    return None


def resolve_redirect(path, user):
    """Where a request for ``path`` by ``user`` must go, or None to let it through."""
    role = required_role(path)
    if role is None:
        return None
    if user is None:
        return LOGIN_PATH
    if user["role"] != role:
        return LANDING_PAGES[user["role"]]
    return None


def current_user():
    """Session snapshot of the logged-in user, or None.

    A payload that is not shaped like one written at login is treated the
    same as no session.
    """
    user = session.get("user")
    if not isinstance(user, dict):
        return None
    if any(key not in user for key in SESSION_KEYS):
        return None
    if user["role"] not in ROLES or not isinstance(user["id"], int):
        return None
    return user


def login_user(user):
    session.clear()
    session.permanent = True
    session["user"] = user.session_payload()


def logout_user():
    session.clear()


def guard_pages():
    target = resolve_redirect(request.path, current_user())
    if target is not None:
        logger.debug("Gate redirect %s -> %s", request.path, target)
        return redirect(target)
    return None


def require_role(*roles):
    """Reject the request with 401 unless the session role is one of ``roles``.

    With no roles, any logged-in user is accepted. The session snapshot is
    passed to the view as ``user``.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = current_user()
            if user is None or (roles and user["role"] not in roles):
                raise AuthRequired()
            return f(*args, user=user, **kwargs)
        return decorated_function
    return decorator


def init_app(app):
    app.before_request(guard_pages)
