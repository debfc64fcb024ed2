from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..api.client import ApiClient, ensure_success
from ..core.exceptions import HttpStatusError, SessionExpiredError
from .model import User
from .repository import Cookies, UserRepository


class HttpUserRepository(UserRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def login(self, username: str, password: str) -> dict[str, str]:
        resp = self._client.request("POST", "/api/auth/login", json={"username": username, "password": password})
        ensure_success(self._client.decode(resp))
        return resp.cookies.get_dict()

    def fetch_status(self, *, cookies: Cookies) -> Optional[dict]:
        try:
            data = self._client.get_json("/api/auth/status", cookies=cookies)
        except SessionExpiredError:
            return None
        if not isinstance(data, dict) or data.get("id") is None:
            return None
        return data

    def logout(self, *, cookies: Cookies) -> None:
        self._client.request("POST", "/logout", cookies=cookies)

    def list_users(self, *, cookies: Cookies) -> Sequence[User]:
        data = self._client.get_json("/api/admin/users", cookies=cookies)
        return [User.from_api(u) for u in (data or {}).get("users") or []]

    def get_user(self, *, cookies: Cookies, user_id: int) -> Optional[User]:
        try:
            data = self._client.get_json(f"/api/admin/users/{int(user_id)}", cookies=cookies)
        except HttpStatusError as e:
            if e.status_code == 404:
                return None
            raise
        user = (data or {}).get("user")
        return User.from_api(user) if user else None

    def create_user(self, *, cookies: Cookies, payload: Mapping[str, Any]) -> None:
        self._client.post_json("/api/admin/users/create", dict(payload), cookies=cookies)

    def update_user(self, *, cookies: Cookies, user_id: int, payload: Mapping[str, Any]) -> None:
        self._client.put_json(f"/api/admin/users/{int(user_id)}", dict(payload), cookies=cookies)

    def change_password(self, *, cookies: Cookies, user_id: int, new_password: str) -> None:
        self._client.post_json(
            f"/api/admin/users/{int(user_id)}/change-password",
            {"newPassword": new_password},
            cookies=cookies,
        )

    def set_enabled(self, *, cookies: Cookies, user_id: int, enabled: bool) -> None:
        self._client.post_json(
            f"/api/admin/users/{int(user_id)}/toggle-status",
            {"enabled": bool(enabled)},
            cookies=cookies,
        )

    def register_user(self, *, cookies: Cookies, form: Mapping[str, str]) -> None:
        self._client.post_form("/api/registration/register", dict(form), cookies=cookies)
