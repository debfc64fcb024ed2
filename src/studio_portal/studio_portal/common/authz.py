"""Session handling and role gating shared by every controller.

The gate is advisory: it decides what the portal shows. The backend still
answers 401/403 on its own and those answers win.
"""

from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import Flask, flash, g, redirect, request, session, url_for

from ..core.constants import ACCESS_DENIED_MESSAGE, ADMIN_AUTHORITY, LOGIN_REQUIRED_MESSAGE
from ..core.exceptions import SessionExpiredError
from ..users.model import UserSession

SESSION_KEY = "portal_user"


def current_user() -> Optional[UserSession]:
    data = session.get(SESSION_KEY)
    if not data:
        return None
    try:
        return UserSession.from_dict(data)
    except (KeyError, TypeError, ValueError):
        session.pop(SESSION_KEY, None)
        return None


def sign_in(user: UserSession, *, remember: bool = False) -> None:
    session.clear()
    session.permanent = remember
    session[SESSION_KEY] = user.to_dict()


def sign_out() -> None:
    session.clear()


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None:
            flash(LOGIN_REQUIRED_MESSAGE, "warning")
            return redirect(url_for("login", next=request.path))
        g.actor = user
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None:
            flash(LOGIN_REQUIRED_MESSAGE, "warning")
            return redirect(url_for("login", next=request.path))
        if not user.has_authority(ADMIN_AUTHORITY):
            flash(ACCESS_DENIED_MESSAGE, "danger")
            return redirect(url_for("projects"))
        g.actor = user
        return view(*args, **kwargs)

    return wrapper


def init_app(app: Flask) -> None:
    @app.context_processor
    def _inject_user() -> dict:
        user = current_user()

        def has_authority(role: str) -> bool:
            return bool(user and user.has_authority(role))

        return {"current_user": user, "has_authority": has_authority, "is_admin": has_authority(ADMIN_AUTHORITY)}

    @app.errorhandler(SessionExpiredError)
    def _session_expired(e: SessionExpiredError):
        app.logger.info("Backend session expired for %s", request.path)
        sign_out()
        flash(LOGIN_REQUIRED_MESSAGE, "warning")
        return redirect(url_for("login", next=request.path))
