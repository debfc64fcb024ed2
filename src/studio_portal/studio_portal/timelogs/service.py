from __future__ import annotations

import logging
from decimal import Decimal
from typing import Mapping, Sequence

from ..common.datetime_utils import parse_optional_date, today_local
from ..common.validators import parse_positive_decimal
from ..core.exceptions import ValidationError
from ..users.model import UserSession
from .model import TimeLog, TimeLogEntry
from .repository import TimeLogRepository

logger = logging.getLogger(__name__)


class TimeLogService:
    def __init__(self, timelogs: TimeLogRepository):
        self._timelogs = timelogs

    @staticmethod
    def validate(task_id: int, form: Mapping[str, str]) -> TimeLogEntry:
        hours = parse_positive_decimal(form.get("hoursWorked"), "Please enter a valid number of hours worked")
        description = (form.get("description") or "").strip()
        if not description:
            raise ValidationError("Please provide a description of work done")
        logged = parse_optional_date(form.get("dateLogged"), "Date") or today_local()
        return TimeLogEntry(task_id=int(task_id), hours=hours, description=description, date_logged=logged)

    def log_time(self, actor: UserSession, task_id: int, form: Mapping[str, str]) -> TimeLogEntry:
        entry = self.validate(task_id, form)
        self._timelogs.log(cookies=actor.cookies, entry=entry)
        logger.info("%s logged %s h on task %s", actor.username, entry.hours, entry.task_id)
        return entry

    def list_for_task(self, actor: UserSession, task_id: int) -> Sequence[TimeLog]:
        return self._timelogs.list_for_task(cookies=actor.cookies, task_id=int(task_id))

    @staticmethod
    def total_hours(logs: Sequence[TimeLog]) -> Decimal:
        return sum((log.hours for log in logs), Decimal(0))
