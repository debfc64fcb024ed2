from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests

from ..core.constants import DEFAULT_TIMEOUT_SECONDS
from ..core.exceptions import HttpStatusError, RejectedError, SessionExpiredError, TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiConfig:
    base_url: str
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


def error_message(payload: Any) -> Optional[str]:
    """Pull the optional ``error``/``message`` string out of a response body."""
    if isinstance(payload, Mapping):
        for key in ("error", "message"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


def ensure_success(payload: Any) -> Any:
    """Raise RejectedError for a 2xx body that reports ``success: false``."""
    if isinstance(payload, Mapping) and payload.get("success") is False:
        raise RejectedError(error_message(payload))
    return payload


class ApiClient:
    """Thin wrapper over ``requests`` for the project-management backend.

    Every call carries the caller's backend session cookies explicitly;
    nothing is shared between users. Non-2xx responses and transport
    failures are mapped onto the ``ApiError`` hierarchy.
    """

    def __init__(self, config: ApiConfig, *, http: Any = requests):
        self._config = config
        self._http = http

    def url(self, path: str) -> str:
        return self._config.base_url.rstrip("/") + "/" + path.lstrip("/")

    def request(
        self,
        method: str,
        path: str,
        *,
        cookies: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
        form: Optional[Mapping[str, Any]] = None,
        json: Any = None,
    ):
        url = self.url(path)
        if params:
            params = {k: v for k, v in params.items() if v is not None and v != ""}
        try:
            resp = self._http.request(
                method,
                url,
                params=params or None,
                data=form,
                json=json,
                cookies=dict(cookies or {}),
                headers={"Accept": "application/json"},
                timeout=self._config.timeout_seconds,
            )
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise TransportError() from e

        if resp.status_code == 401:
            logger.info("%s %s -> 401", method, path)
            raise SessionExpiredError(error_message(self._safe_json(resp)))
        if not 200 <= resp.status_code < 300:
            logger.warning("%s %s -> %s", method, path, resp.status_code)
            raise HttpStatusError(resp.status_code, error_message(self._safe_json(resp)))
        return resp

    @staticmethod
    def _safe_json(resp) -> Any:
        try:
            return resp.json()
        except ValueError:
            return None

    def decode(self, resp) -> Any:
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise TransportError("Invalid response from server") from e

    def get_json(self, path: str, *, cookies=None, params=None) -> Any:
        return ensure_success(self.decode(self.request("GET", path, cookies=cookies, params=params)))

    def post_form(self, path: str, form: Mapping[str, Any], *, cookies=None) -> Any:
        return ensure_success(self.decode(self.request("POST", path, cookies=cookies, form=form)))

    def post_json(self, path: str, body: Any, *, cookies=None) -> Any:
        return ensure_success(self.decode(self.request("POST", path, cookies=cookies, json=body)))

    def put_json(self, path: str, body: Any, *, cookies=None) -> Any:
        return ensure_success(self.decode(self.request("PUT", path, cookies=cookies, json=body)))
