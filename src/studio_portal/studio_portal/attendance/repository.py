from __future__ import annotations

from datetime import date
from typing import Mapping, Protocol

from ..core.enums import AttendanceMark

Cookies = Mapping[str, str]


class AttendanceRepository(Protocol):
    def get_month(self, *, cookies: Cookies, user_id: int, year: int, month: int) -> dict[date, AttendanceMark]:
        raise NotImplementedError
