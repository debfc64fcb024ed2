from __future__ import annotations

import logging
from functools import partial
from typing import Mapping, Optional

from ..common.fanout import join_all
from ..common.pagination import PaginatedListController
from ..common.validators import require_choice, require_non_empty
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import ProjectStage, TaskStatus
from ..core.exceptions import SessionExpiredError, ValidationError
from ..users.model import UserSession
from .model import Task
from .repository import TaskRepository

logger = logging.getLogger(__name__)

LOAD_TASKS_ERROR = "Failed to load tasks"


class TaskTabs:
    """The My Tasks screen: four independent paginated lists, one per tab.

    Only the active tab is rendered; every tab keeps its own pagination and
    carries it in the query string as ``<tab>_page`` so switching tabs does
    not lose it.
    """

    NAMES = ("assigned", "reported", "to_check", "all")

    def __init__(self, tabs: Mapping[str, PaginatedListController[Task]], *, active: str = "assigned"):
        self.tabs = dict(tabs)
        self.active = active if active in self.tabs else self.NAMES[0]
        self.error: Optional[str] = None

    @property
    def current(self) -> PaginatedListController[Task]:
        return self.tabs[self.active]

    def switch(self, name: str) -> bool:
        if name not in self.tabs:
            return False
        self.active = name
        return True

    def page_args(self, exclude: Optional[str] = None) -> dict[str, int]:
        """Query arguments keeping every other tab on its current page."""
        return {
            f"{name}_page": controller.pagination.current_page
            for name, controller in self.tabs.items()
            if name != exclude and controller.pagination.current_page > 0
        }

    def _join(self, jobs) -> Optional[dict]:
        result = join_all(jobs)
        if result.ok:
            return result.results
        expired = result.first_error(SessionExpiredError)
        if expired is not None:
            raise expired
        logger.warning("Loading task tabs failed: %s", ", ".join(sorted(result.errors)))
        return None

    def load_all(self, pages: Optional[Mapping[str, int]] = None) -> bool:
        """Fetch every tab concurrently; state changes only if all of them succeed.

        Page 0 of every tab comes first. A requested later page is fetched in
        a second round only when that tab reports it exists.
        """
        pages = pages or {}
        fetched = self._join({name: partial(controller.fetch_page, 0) for name, controller in self.tabs.items()})
        if fetched is not None:
            wanted = {
                name: int(pages[name])
                for name in self.tabs
                if name in pages and 0 < int(pages[name]) < fetched[name][1].total_pages
            }
            if wanted:
                later = self._join({name: partial(self.tabs[name].fetch_page, page) for name, page in wanted.items()})
                fetched = None if later is None else {**fetched, **later}

        if fetched is None:
            self.error = LOAD_TASKS_ERROR
            return False

        for name, (items, state) in fetched.items():
            self.tabs[name].apply(items, state)
        self.error = None
        return True

    def dispose(self) -> None:
        """Drop late responses for a screen kept across requests."""
        for controller in self.tabs.values():
            controller.dispose()


class TaskService:
    def __init__(self, tasks: TaskRepository, *, page_size: int = DEFAULT_PAGE_SIZE):
        self._tasks = tasks
        self._page_size = int(page_size)

    def _controller(self, actor: UserSession, fetch, *, items_key: str) -> PaginatedListController[Task]:
        return PaginatedListController(
            partial(fetch, cookies=actor.cookies),
            items_key=items_key,
            parse_item=Task.from_api,
            page_size=self._page_size,
            error_message=LOAD_TASKS_ERROR,
        )

    def tabs(self, actor: UserSession, *, active: str = "assigned") -> TaskTabs:
        return TaskTabs(
            {
                "assigned": self._controller(actor, self._tasks.assigned_to_me, items_key="tasks"),
                "reported": self._controller(actor, self._tasks.reported_by_me, items_key="tasks"),
                "to_check": self._controller(actor, self._tasks.to_check, items_key="tasks"),
                "all": self._controller(actor, self._tasks.list_page, items_key="tasks"),
            },
            active=active,
        )

    def my_tasks(
        self, actor: UserSession, *, active: str = "assigned", page: int = 0, pages: Optional[Mapping[str, int]] = None
    ) -> TaskTabs:
        """Load the tabbed screen; ``page`` is the active tab's, ``pages`` holds the others."""
        tabs = self.tabs(actor, active=active)
        tabs.load_all({**(pages or {}), tabs.active: page})
        return tabs

    def get_details(self, actor: UserSession, task_id: int) -> Task:
        task = self._tasks.get_details(cookies=actor.cookies, task_id=int(task_id))
        if not task:
            raise ValidationError("Task not found")
        return task

    def create(self, actor: UserSession, project_id: int, form: Mapping[str, str]) -> None:
        data = {
            "name": require_non_empty(form.get("name"), "Task name"),
            "description": (form.get("description") or "").strip(),
            "projectStage": require_choice(form.get("projectStage"), ProjectStage, "Project stage", required=True).value,
        }
        self._tasks.create(cookies=actor.cookies, project_id=int(project_id), form=data)
        logger.info("%s created task %s in project %s", actor.username, data["name"], project_id)

    def update(self, actor: UserSession, task_id: int, form: Mapping[str, str]) -> None:
        data = {
            "name": require_non_empty(form.get("name"), "Task name"),
            "description": (form.get("description") or "").strip(),
            "projectStage": require_choice(form.get("projectStage"), ProjectStage, "Project stage", required=True).value,
            "status": require_choice(form.get("status"), TaskStatus, "Status", required=True).value,
        }
        self._tasks.update(cookies=actor.cookies, task_id=int(task_id), form=data)
        logger.info("%s updated task %s", actor.username, task_id)
