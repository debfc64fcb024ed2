from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from ..api.client import ApiClient
from ..core.exceptions import HttpStatusError
from .model import Project, ProjectDetails, ProjectTaskSummary
from .repository import Cookies, ProjectRepository

_DETAILS_LINK_RE = re.compile(r"/projects/(\d+)/details")


def _task_summary(data: Mapping[str, Any]) -> ProjectTaskSummary:
    assignee = data.get("assignee") or {}
    return ProjectTaskSummary(
        task_id=int(data["id"]),
        name=data.get("name") or "",
        status=data.get("status"),
        assignee=assignee.get("name") or assignee.get("username") if assignee else None,
    )


class HttpProjectRepository(ProjectRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def list_page(self, *, cookies: Cookies, page: int, size: int, filters: Mapping[str, str]) -> Any:
        params = {"page": page, "size": size}
        params.update(filters)
        return self._client.get_json("/api/projects/paginated", cookies=cookies, params=params)

    def get_details(self, *, cookies: Cookies, project_id: int) -> Optional[ProjectDetails]:
        try:
            data = self._client.get_json(f"/api/projects/{int(project_id)}/details", cookies=cookies)
        except HttpStatusError as e:
            if e.status_code == 404:
                return None
            raise
        if not data or not data.get("project"):
            return None
        return ProjectDetails(
            project=Project.from_api(data["project"]),
            tasks=tuple(_task_summary(t) for t in data.get("tasks") or []),
        )

    def get_for_edit(self, *, cookies: Cookies, project_id: int) -> Optional[Project]:
        try:
            data = self._client.get_json(f"/api/projects/{int(project_id)}/edit", cookies=cookies)
        except HttpStatusError as e:
            if e.status_code == 404:
                return None
            raise
        dto = (data or {}).get("projectUpdateDto")
        return Project.from_api(dto, project_id=project_id) if dto else None

    def create(self, *, cookies: Cookies, form: Mapping[str, str]) -> Optional[int]:
        # The save endpoint answers with a page or redirect target, not JSON.
        resp = self._client.request("POST", "/api/projects/save", cookies=cookies, form=dict(form))
        match = _DETAILS_LINK_RE.search(resp.url or "") or _DETAILS_LINK_RE.search(resp.text or "")
        return int(match.group(1)) if match else None

    def update(self, *, cookies: Cookies, project_id: int, form: Mapping[str, str]) -> None:
        self._client.request("POST", f"/api/projects/{int(project_id)}/update", cookies=cookies, form=dict(form))

    def delete(self, *, cookies: Cookies, project_id: int) -> None:
        self._client.request("POST", f"/api/projects/{int(project_id)}/delete", cookies=cookies)
