from __future__ import annotations

from typing import Any, Mapping, Optional

from ..api.client import ApiClient
from ..core.exceptions import HttpStatusError
from .model import Task
from .repository import Cookies, TaskRepository


class HttpTaskRepository(TaskRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def _page(self, path: str, cookies: Cookies, page: int, size: int, filters: Mapping[str, str]) -> Any:
        params = {"page": page, "size": size}
        params.update(filters)
        return self._client.get_json(path, cookies=cookies, params=params)

    def assigned_to_me(self, *, cookies: Cookies, page: int, size: int, filters: Mapping[str, str]) -> Any:
        return self._page("/api/tasks/assigned-to-me", cookies, page, size, filters)

    def reported_by_me(self, *, cookies: Cookies, page: int, size: int, filters: Mapping[str, str]) -> Any:
        return self._page("/api/tasks/reported-by-me", cookies, page, size, filters)

    def to_check(self, *, cookies: Cookies, page: int, size: int, filters: Mapping[str, str]) -> Any:
        return self._page("/api/tasks/to-check", cookies, page, size, filters)

    def list_page(self, *, cookies: Cookies, page: int, size: int, filters: Mapping[str, str]) -> Any:
        return self._page("/api/tasks/paginated", cookies, page, size, filters)

    def get_details(self, *, cookies: Cookies, task_id: int) -> Optional[Task]:
        try:
            data = self._client.get_json(f"/api/tasks/{int(task_id)}/details", cookies=cookies)
        except HttpStatusError as e:
            if e.status_code == 404:
                return None
            raise
        return Task.from_api(data) if data else None

    def create(self, *, cookies: Cookies, project_id: int, form: Mapping[str, str]) -> None:
        self._client.request("POST", f"/api/projects/{int(project_id)}/tasks", cookies=cookies, form=dict(form))

    def update(self, *, cookies: Cookies, task_id: int, form: Mapping[str, str]) -> None:
        self._client.request("POST", f"/api/tasks/{int(task_id)}/update", cookies=cookies, form=dict(form))
