from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from ..common.validators import require_min_length, require_non_empty, validate_registration_form
from ..core.constants import ACCESS_DENIED_MESSAGE, MIN_ADMIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    SessionExpiredError,
    TransportError,
    ValidationError,
)
from .model import User, UserSession
from .repository import UserRepository

logger = logging.getLogger(__name__)


def require_admin(actor: Optional[UserSession]) -> UserSession:
    if actor is None or not actor.has_authority(Role.ADMIN.value):
        raise AuthorizationError(ACCESS_DENIED_MESSAGE)
    return actor


def _parse_role(value: Optional[str]) -> Role:
    try:
        return Role(value or Role.USER.value)
    except ValueError:
        raise ValidationError("Invalid role")


def _check_new_password(password: Optional[str], confirm: Optional[str]) -> str:
    password = password or ""
    if password != (confirm or ""):
        raise ValidationError("Passwords do not match")
    return require_min_length(password, "Password", MIN_ADMIN_PASSWORD_LENGTH)


class AuthService:
    """Use case: sign in against the backend and build the UserSession."""

    def __init__(self, users: UserRepository):
        self._users = users

    def login(self, username: str, password: str) -> UserSession:
        username = require_non_empty(username, "Username")
        if not password:
            raise ValidationError("Password is required")

        try:
            cookies = self._users.login(username, password)
        except TransportError as e:
            logger.error("Login for %s could not reach the backend: %s", username, e.message)
            raise AuthenticationError("Login failed. Please try again.")
        except ApiError as e:
            logger.info("Login rejected for %s: %s", username, e.message)
            raise AuthenticationError(e.detail or "Invalid username or password.")

        status = self._users.fetch_status(cookies=cookies)
        if not status:
            raise AuthenticationError("Login successful but failed to get user information. Please try again.")

        session_user = UserSession.from_status(status, cookies)
        logger.info("User %s signed in (authorities=%s)", session_user.username, ",".join(session_user.authorities))
        return session_user

    def profile(self, actor: UserSession) -> dict:
        """Fresh copy of the signed-in user's backend record."""
        status = self._users.fetch_status(cookies=actor.cookies)
        if not status:
            raise SessionExpiredError()
        return status

    def logout(self, actor: UserSession) -> None:
        try:
            self._users.logout(cookies=actor.cookies)
        except ApiError as e:
            # The portal session is cleared either way.
            logger.info("Backend logout for %s failed: %s", actor.username, e.message)


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self, actor: UserSession) -> Sequence[User]:
        require_admin(actor)
        return self._users.list_users(cookies=actor.cookies)

    def get_user(self, actor: UserSession, user_id: int) -> User:
        require_admin(actor)
        user = self._users.get_user(cookies=actor.cookies, user_id=int(user_id))
        if not user:
            raise ValidationError("User not found")
        return user

    def create_user(self, actor: UserSession, form: Mapping[str, str]) -> None:
        require_admin(actor)
        username = require_non_empty(form.get("username"), "Username")
        password = _check_new_password(form.get("password"), form.get("confirmPassword"))
        role = _parse_role(form.get("role"))

        self._users.create_user(
            cookies=actor.cookies,
            payload={
                "username": username,
                "name": (form.get("name") or "").strip(),
                "email": (form.get("email") or "").strip(),
                "password": password,
                "designation": (form.get("designation") or "").strip(),
                "specialization": (form.get("specialization") or "").strip(),
                "bio": (form.get("bio") or "").strip(),
                "role": role.value,
            },
        )
        logger.info("%s created user %s", actor.username, username)

    def update_user(self, actor: UserSession, user_id: int, form: Mapping[str, str]) -> None:
        require_admin(actor)
        role = _parse_role(form.get("role"))
        self._users.update_user(
            cookies=actor.cookies,
            user_id=int(user_id),
            payload={
                "name": (form.get("name") or "").strip(),
                "email": (form.get("email") or "").strip(),
                "designation": (form.get("designation") or "").strip(),
                "specialization": (form.get("specialization") or "").strip(),
                "bio": (form.get("bio") or "").strip(),
                "role": role.value,
            },
        )

    def change_password(self, actor: UserSession, user_id: int, new_password: Optional[str]) -> None:
        require_admin(actor)
        new_password = (new_password or "").strip()
        require_min_length(new_password, "Password", MIN_ADMIN_PASSWORD_LENGTH)
        self._users.change_password(cookies=actor.cookies, user_id=int(user_id), new_password=new_password)

    def set_enabled(self, actor: UserSession, user_id: int, enabled: bool) -> None:
        require_admin(actor)
        self._users.set_enabled(cookies=actor.cookies, user_id=int(user_id), enabled=enabled)


class RegistrationService:
    """Use case: admin registers a new user with the full registration rules."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(self, actor: UserSession, form: Mapping[str, str]) -> dict[str, str]:
        """Validate and submit; returns the per-field errors (empty on success).

        Nothing is sent to the backend while any field is invalid.
        """
        require_admin(actor)
        result = validate_registration_form(form)
        if not result.is_valid:
            return result.errors

        role = _parse_role(form.get("role"))
        payload = dict(result.validated_data)
        payload["role"] = role.value
        self._users.register_user(cookies=actor.cookies, form=payload)
        logger.info("%s registered user %s", actor.username, payload["username"])
        return {}
