from __future__ import annotations

from datetime import date

from ..api.client import ApiClient
from ..core.enums import AttendanceMark
from .model import parse_marks
from .repository import AttendanceRepository, Cookies


class HttpAttendanceRepository(AttendanceRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def get_month(self, *, cookies: Cookies, user_id: int, year: int, month: int) -> dict[date, AttendanceMark]:
        data = self._client.get_json(
            f"/api/admin/users/{int(user_id)}/attendance",
            cookies=cookies,
            params={"year": int(year), "month": int(month)},
        )
        return parse_marks(data)
