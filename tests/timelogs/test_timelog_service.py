from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from src.studio_portal.studio_portal.core.exceptions import ValidationError
from src.studio_portal.studio_portal.timelogs import service as timelog_service
from src.studio_portal.studio_portal.timelogs.model import TimeLog
from src.studio_portal.studio_portal.timelogs.service import TimeLogService
from src.studio_portal.studio_portal.users.model import UserSession

ADA = UserSession(user_id=2, username="ada", name="Ada", cookies={"JSESSIONID": "ada"})


class InMemoryTimeLogs:
    def __init__(self):
        self.entries = []

    def list_for_task(self, *, cookies, task_id):
        return [
            TimeLog.from_api({"id": 1, "hoursLogged": 2.5, "workDescription": "Sketches", "dateLogged": "2026-04-01", "user": {"username": "ada"}}),
            TimeLog.from_api({"id": 2, "hoursLogged": "1", "workDescription": "Call", "dateLogged": None}),
        ]

    def log(self, *, cookies, entry):
        self.entries.append(entry)


@pytest.mark.parametrize("hours", ["", "0", "-1", "abc"])
def test_hours_must_be_positive(hours):
    with pytest.raises(ValidationError, match="Please enter a valid number of hours worked"):
        TimeLogService(InMemoryTimeLogs()).log_time(ADA, 3, {"hoursWorked": hours, "description": "x"})


def test_description_required():
    with pytest.raises(ValidationError, match="Please provide a description of work done"):
        TimeLogService(InMemoryTimeLogs()).log_time(ADA, 3, {"hoursWorked": "2", "description": "   "})


def test_date_defaults_to_today(monkeypatch):
    monkeypatch.setattr(timelog_service, "today_local", lambda: date(2026, 4, 10))
    repo = InMemoryTimeLogs()

    entry = TimeLogService(repo).log_time(ADA, 3, {"hoursWorked": "1.5", "description": " Drawings "})

    assert entry.date_logged == date(2026, 4, 10)
    assert entry.as_form() == {"hoursWorked": "1.5", "description": "Drawings", "dateLogged": "2026-04-10"}
    assert repo.entries == [entry]


def test_listing_and_total():
    service = TimeLogService(InMemoryTimeLogs())
    logs = service.list_for_task(ADA, 3)

    assert logs[0].username == "ada"
    assert logs[0].date_logged == date(2026, 4, 1)
    assert logs[1].date_logged is None
    assert service.total_hours(logs) == Decimal("3.5")
