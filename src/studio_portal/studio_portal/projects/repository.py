from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from .model import Project, ProjectDetails

Cookies = Mapping[str, str]


class ProjectRepository(Protocol):
    def list_page(self, *, cookies: Cookies, page: int, size: int, filters: Mapping[str, str]) -> Any:
        """Raw paginated response body (``projects`` + pagination fields)."""
        raise NotImplementedError

    def get_details(self, *, cookies: Cookies, project_id: int) -> Optional[ProjectDetails]:
        raise NotImplementedError

    def get_for_edit(self, *, cookies: Cookies, project_id: int) -> Optional[Project]:
        raise NotImplementedError

    def create(self, *, cookies: Cookies, form: Mapping[str, str]) -> Optional[int]:
        """Create a project; returns the new id when the backend reveals it."""
        raise NotImplementedError

    def update(self, *, cookies: Cookies, project_id: int, form: Mapping[str, str]) -> None:
        raise NotImplementedError

    def delete(self, *, cookies: Cookies, project_id: int) -> None:
        raise NotImplementedError
