from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from .model import Task

Cookies = Mapping[str, str]


class TaskRepository(Protocol):
    def assigned_to_me(self, *, cookies: Cookies, page: int, size: int, filters: Mapping[str, str]) -> Any:
        raise NotImplementedError

    def reported_by_me(self, *, cookies: Cookies, page: int, size: int, filters: Mapping[str, str]) -> Any:
        raise NotImplementedError

    def to_check(self, *, cookies: Cookies, page: int, size: int, filters: Mapping[str, str]) -> Any:
        raise NotImplementedError

    def list_page(self, *, cookies: Cookies, page: int, size: int, filters: Mapping[str, str]) -> Any:
        raise NotImplementedError

    def get_details(self, *, cookies: Cookies, task_id: int) -> Optional[Task]:
        raise NotImplementedError

    def create(self, *, cookies: Cookies, project_id: int, form: Mapping[str, str]) -> None:
        raise NotImplementedError

    def update(self, *, cookies: Cookies, task_id: int, form: Mapping[str, str]) -> None:
        raise NotImplementedError
