from __future__ import annotations

import pytest

from src.studio_portal.studio_portal.core.enums import TaskStatus
from src.studio_portal.studio_portal.core.exceptions import HttpStatusError, SessionExpiredError, ValidationError
from src.studio_portal.studio_portal.tasks.model import Task
from src.studio_portal.studio_portal.tasks.service import LOAD_TASKS_ERROR, TaskService
from src.studio_portal.studio_portal.users.model import UserSession

ADA = UserSession(user_id=2, username="ada", name="Ada", authorities=("ROLE_USER",), cookies={"JSESSIONID": "ada"})


def _task(task_id, **extra):
    return {"id": task_id, "name": f"Task {task_id}", "status": "IN_PROGRESS", **extra}


class InMemoryTasks:
    def __init__(self):
        # Legacy endpoints answer with bare lists.
        self.assigned = [_task(1, assignee={"id": 2, "username": "ada"})]
        self.reported = [_task(2, reporter={"id": 2, "username": "ada"}), _task(3)]
        self.checking = []
        self.everything = [_task(i) for i in range(1, 24)]
        self.fail: dict[str, Exception] = {}
        self.calls: list[tuple] = []
        self.created: list[tuple] = []
        self.updated: list[tuple] = []

    def _serve(self, name, rows, cookies, page, size):
        self.calls.append((name, dict(cookies), page, size))
        if name in self.fail:
            raise self.fail[name]
        return rows

    def assigned_to_me(self, *, cookies, page, size, filters):
        return self._serve("assigned", self.assigned, cookies, page, size)

    def reported_by_me(self, *, cookies, page, size, filters):
        return self._serve("reported", self.reported, cookies, page, size)

    def to_check(self, *, cookies, page, size, filters):
        return self._serve("to_check", self.checking, cookies, page, size)

    def list_page(self, *, cookies, page, size, filters):
        self._serve("all", None, cookies, page, size)
        total_pages = (len(self.everything) + size - 1) // size
        return {
            "tasks": self.everything[page * size:(page + 1) * size],
            "currentPage": page,
            "totalItems": len(self.everything),
            "totalPages": total_pages,
            "hasNext": page + 1 < total_pages,
            "hasPrevious": page > 0,
        }

    def get_details(self, *, cookies, task_id):
        return Task.from_api(_task(task_id)) if task_id == 1 else None

    def create(self, *, cookies, project_id, form):
        self.created.append((project_id, dict(form)))

    def update(self, *, cookies, task_id, form):
        self.updated.append((task_id, dict(form)))


def test_all_four_tabs_load_with_their_own_pagination():
    repo = InMemoryTasks()
    tabs = TaskService(repo, page_size=10).my_tasks(ADA, active="all", page=2)

    assert tabs.error is None
    assert sorted((c[0], c[2]) for c in repo.calls) == [
        ("all", 0), ("all", 2), ("assigned", 0), ("reported", 0), ("to_check", 0)
    ]
    assert all(c[1] == {"JSESSIONID": "ada"} for c in repo.calls)

    assert tabs.active == "all"
    assert tabs.current.pagination.current_page == 2
    assert [t.task_id for t in tabs.current.items] == [21, 22, 23]
    assert tabs.tabs["reported"].pagination.total_items == 2
    assert tabs.tabs["reported"].pagination.current_page == 0
    assert tabs.tabs["to_check"].items == []


def test_tab_page_past_the_end_is_not_requested():
    repo = InMemoryTasks()
    tabs = TaskService(repo, page_size=10).my_tasks(ADA, active="all", page=9)

    assert ("all", 9) not in [(c[0], c[2]) for c in repo.calls]
    assert len(repo.calls) == 4
    assert tabs.current.pagination.current_page == 0


def test_inactive_tabs_keep_their_pages():
    repo = InMemoryTasks()
    tabs = TaskService(repo, page_size=10).my_tasks(ADA, active="assigned", pages={"all": 1})

    assert tabs.active == "assigned"
    assert tabs.tabs["all"].pagination.current_page == 1
    assert tabs.page_args(exclude="assigned") == {"all_page": 1}
    assert tabs.page_args(exclude="all") == {}


def test_second_round_failure_applies_nothing():
    repo = InMemoryTasks()
    original = repo.list_page

    def flaky(*, cookies, page, size, filters):
        if page > 0:
            raise HttpStatusError(502)
        return original(cookies=cookies, page=page, size=size, filters=filters)

    repo.list_page = flaky
    tabs = TaskService(repo, page_size=10).tabs(ADA, active="all")

    assert tabs.load_all({"all": 1}) is False
    assert tabs.error == LOAD_TASKS_ERROR
    assert all(controller.items == [] for controller in tabs.tabs.values())


def test_one_failing_tab_applies_nothing():
    repo = InMemoryTasks()
    repo.fail["to_check"] = HttpStatusError(500)
    tabs = TaskService(repo).my_tasks(ADA)

    assert tabs.error == LOAD_TASKS_ERROR
    assert all(controller.items == [] for controller in tabs.tabs.values())
    assert len(repo.calls) == 4


def test_expired_session_in_any_tab_propagates():
    repo = InMemoryTasks()
    repo.fail["reported"] = SessionExpiredError()
    with pytest.raises(SessionExpiredError):
        TaskService(repo).my_tasks(ADA)


def test_switching_tabs_does_not_fetch():
    repo = InMemoryTasks()
    tabs = TaskService(repo).my_tasks(ADA)
    calls = len(repo.calls)

    assert tabs.switch("reported")
    assert tabs.switch("nope") is False
    assert tabs.active == "reported"
    assert len(repo.calls) == calls


def test_unknown_tab_falls_back_to_assigned():
    tabs = TaskService(InMemoryTasks()).tabs(ADA, active="bogus")
    assert tabs.active == "assigned"


def test_can_edit_for_assignee_reporter_or_checker():
    assigned = Task.from_api(_task(1, assignee={"id": 2, "username": "ada"}))
    reported = Task.from_api(_task(2, reporter={"id": 2, "username": "ada"}))
    checked = Task.from_api(_task(3, checkedBy={"id": 2, "username": "ada"}))
    foreign = Task.from_api(_task(4, assignee={"id": 9, "username": "bob"}))

    assert assigned.can_edit(ADA) and reported.can_edit(ADA) and checked.can_edit(ADA)
    assert not foreign.can_edit(ADA)


def test_css_classes():
    task = Task.from_api({"id": 1, "name": "x", "status": "IN_REVIEW", "priority": "URGENT"})
    assert task.status_css_class == "status-in-review"
    assert task.priority_css_class == "priority-urgent"

    bare = Task.from_api({"id": 2, "name": "y"})
    assert bare.status_css_class == "status-to-do"
    assert bare.priority_css_class == "priority-medium"


def test_create_and_update_forms():
    repo = InMemoryTasks()
    service = TaskService(repo)

    service.create(ADA, 7, {"name": " Site survey ", "projectStage": "STAGE_01_PREPARATION_BRIEF"})
    assert repo.created == [(7, {"name": "Site survey", "description": "", "projectStage": "STAGE_01_PREPARATION_BRIEF"})]

    with pytest.raises(ValidationError, match="Status is required"):
        service.update(ADA, 1, {"name": "x", "projectStage": "STAGE_01_PREPARATION_BRIEF"})

    service.update(ADA, 1, {"name": "x", "projectStage": "STAGE_01_PREPARATION_BRIEF", "status": "done"})
    assert repo.updated[0][1]["status"] == TaskStatus.DONE.value


def test_missing_task():
    with pytest.raises(ValidationError, match="Task not found"):
        TaskService(InMemoryTasks()).get_details(ADA, 99)
