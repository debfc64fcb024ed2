from __future__ import annotations

from typing import Mapping, Protocol, Sequence

from .model import TimeLog, TimeLogEntry

Cookies = Mapping[str, str]


class TimeLogRepository(Protocol):
    def list_for_task(self, *, cookies: Cookies, task_id: int) -> Sequence[TimeLog]:
        raise NotImplementedError

    def log(self, *, cookies: Cookies, entry: TimeLogEntry) -> None:
        raise NotImplementedError
