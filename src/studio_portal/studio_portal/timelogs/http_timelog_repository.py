from __future__ import annotations

from typing import Sequence

from ..api.client import ApiClient, ensure_success
from .model import TimeLog, TimeLogEntry
from .repository import Cookies, TimeLogRepository


class HttpTimeLogRepository(TimeLogRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def list_for_task(self, *, cookies: Cookies, task_id: int) -> Sequence[TimeLog]:
        data = self._client.get_json(f"/api/tasks/{int(task_id)}/timelogs", cookies=cookies)
        if isinstance(data, dict):
            data = data.get("timeLogs") or []
        return [TimeLog.from_api(row) for row in data or []]

    def log(self, *, cookies: Cookies, entry: TimeLogEntry) -> None:
        resp = self._client.request(
            "POST", f"/api/tasks/{entry.task_id}/timelogs", cookies=cookies, form=entry.as_form()
        )
        if resp.content and "json" in resp.headers.get("Content-Type", ""):
            ensure_success(self._client.decode(resp))
