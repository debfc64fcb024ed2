from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import User

Cookies = Mapping[str, str]


class UserRepository(Protocol):
    """Backend access for authentication and user administration.

    Note: the service layer depends on this interface, not on the HTTP client.
    """

    def login(self, username: str, password: str) -> dict[str, str]:
        """Return the backend session cookies of a successful login."""
        raise NotImplementedError

    def fetch_status(self, *, cookies: Cookies) -> Optional[dict]:
        raise NotImplementedError

    def logout(self, *, cookies: Cookies) -> None:
        raise NotImplementedError

    def list_users(self, *, cookies: Cookies) -> Sequence[User]:
        raise NotImplementedError

    def get_user(self, *, cookies: Cookies, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, cookies: Cookies, payload: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def update_user(self, *, cookies: Cookies, user_id: int, payload: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def change_password(self, *, cookies: Cookies, user_id: int, new_password: str) -> None:
        raise NotImplementedError

    def set_enabled(self, *, cookies: Cookies, user_id: int, enabled: bool) -> None:
        raise NotImplementedError

    def register_user(self, *, cookies: Cookies, form: Mapping[str, str]) -> None:
        raise NotImplementedError
