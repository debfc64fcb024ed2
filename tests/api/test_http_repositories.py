from __future__ import annotations

import json as jsonlib
from datetime import date

from src.studio_portal.studio_portal.api.client import ApiClient, ApiConfig
from src.studio_portal.studio_portal.attendance.http_attendance_repository import HttpAttendanceRepository
from src.studio_portal.studio_portal.core.enums import AttendanceMark, ProjectStage
from src.studio_portal.studio_portal.projects.http_project_repository import HttpProjectRepository
from src.studio_portal.studio_portal.tasks.http_task_repository import HttpTaskRepository
from src.studio_portal.studio_portal.timelogs.http_timelog_repository import HttpTimeLogRepository
from src.studio_portal.studio_portal.timelogs.model import TimeLogEntry
from src.studio_portal.studio_portal.users.http_user_repository import HttpUserRepository


class FakeCookies(dict):
    def get_dict(self):
        return dict(self)


class FakeResponse:
    def __init__(self, status_code=200, body=None, *, text=None, url="", cookies=None, content_type="application/json"):
        self.status_code = status_code
        self.text = text if text is not None else ("" if body is None else jsonlib.dumps(body))
        self.content = self.text.encode()
        self.url = url
        self.cookies = FakeCookies(cookies or {})
        self.headers = {"Content-Type": content_type}

    def json(self):
        return jsonlib.loads(self.text)


class FakeHttp:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        return self.responses.pop(0)


def client_with(*responses):
    http = FakeHttp(*responses)
    return ApiClient(ApiConfig(base_url="http://backend.test"), http=http), http


def test_login_returns_backend_cookies():
    client, http = client_with(FakeResponse(body={"success": True}, cookies={"JSESSIONID": "xyz"}))
    cookies = HttpUserRepository(client).login("ada", "secret")

    assert cookies == {"JSESSIONID": "xyz"}
    assert http.calls[0]["json"] == {"username": "ada", "password": "secret"}
    assert http.calls[0]["url"] == "http://backend.test/api/auth/login"


def test_status_401_means_no_user():
    client, _ = client_with(FakeResponse(401))
    assert HttpUserRepository(client).fetch_status(cookies={}) is None


def test_user_lookup_404_is_none():
    client, _ = client_with(FakeResponse(404, {"error": "User not found"}))
    assert HttpUserRepository(client).get_user(cookies={}, user_id=8) is None


def test_project_details_and_edit_payloads():
    client, http = client_with(
        FakeResponse(body={"project": {"id": 3, "name": "Library", "budget": "10.5"}, "tasks": [{"id": 9, "name": "Survey", "assignee": {"username": "ada"}}]}),
        FakeResponse(body={"projectUpdateDto": {"name": "Library", "status": "ON_HOLD"}}),
    )
    repo = HttpProjectRepository(client)

    details = repo.get_details(cookies={"JSESSIONID": "a"}, project_id=3)
    assert details.project.name == "Library"
    assert details.tasks[0].assignee == "ada"
    assert http.calls[0]["url"].endswith("/api/projects/3/details")

    project = repo.get_for_edit(cookies={}, project_id=3)
    assert project.project_id == 3
    assert project.status.value == "ON_HOLD"


def test_project_create_reads_new_id_from_redirect():
    client, http = client_with(FakeResponse(text="<html></html>", url="http://backend.test/projects/17/details", content_type="text/html"))
    assert HttpProjectRepository(client).create(cookies={}, form={"name": "x"}) == 17
    assert http.calls[0]["data"] == {"name": "x"}


def test_task_tabs_use_their_endpoints():
    client, http = client_with(FakeResponse(body=[]), FakeResponse(body={"tasks": []}))
    repo = HttpTaskRepository(client)

    assert repo.assigned_to_me(cookies={}, page=0, size=10, filters={}) == []
    repo.list_page(cookies={}, page=2, size=10, filters={})

    assert http.calls[0]["url"].endswith("/api/tasks/assigned-to-me")
    assert http.calls[1]["url"].endswith("/api/tasks/paginated")
    assert http.calls[1]["params"] == {"page": 2, "size": 10}


def test_task_create_posts_form_under_project():
    client, http = client_with(FakeResponse(body={"success": True}))
    HttpTaskRepository(client).create(
        cookies={}, project_id=4, form={"name": "x", "projectStage": ProjectStage.STAGE_05_CONSTRUCTION.value}
    )
    assert http.calls[0]["method"] == "POST"
    assert http.calls[0]["url"].endswith("/api/projects/4/tasks")


def test_timelog_post_and_list():
    client, http = client_with(
        FakeResponse(body={"success": True}),
        FakeResponse(body=[{"id": 1, "hoursLogged": 3, "workDescription": "Model", "dateLogged": "2026-04-02"}]),
    )
    repo = HttpTimeLogRepository(client)
    repo.log(cookies={}, entry=TimeLogEntry(task_id=5, hours=3, description="Model", date_logged=date(2026, 4, 2)))
    logs = repo.list_for_task(cookies={}, task_id=5)

    assert http.calls[0]["data"] == {"hoursWorked": "3", "description": "Model", "dateLogged": "2026-04-02"}
    assert logs[0].description == "Model"


def test_attendance_month_query():
    client, http = client_with(FakeResponse(body={"2026-04-01": "present", "2026-04-02": "no-data"}))
    marks = HttpAttendanceRepository(client).get_month(cookies={}, user_id=3, year=2026, month=4)

    assert http.calls[0]["params"] == {"year": 2026, "month": 4}
    assert marks[date(2026, 4, 2)] is AttendanceMark.NO_DATA
