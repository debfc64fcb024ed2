from __future__ import annotations

from ..api.client import ApiClient
from ..core.exceptions import RejectedError
from .model import OrganizationSignup
from .repository import OrganizationRepository


class HttpOrganizationRepository(OrganizationRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def register(self, signup: OrganizationSignup) -> None:
        data = self._client.post_json("/api/organization/register", signup.as_payload())
        if not isinstance(data, dict) or not data.get("success"):
            raise RejectedError((data or {}).get("message") if isinstance(data, dict) else None)
