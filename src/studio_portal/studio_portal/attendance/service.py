from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import today_local
from ..core.exceptions import ValidationError
from ..users.model import UserSession
from ..users.service import require_admin
from .model import AttendanceMonth
from .repository import AttendanceRepository


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def month(
        self,
        actor: UserSession,
        user_id: int,
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
        today: Optional[date] = None,
    ) -> AttendanceMonth:
        require_admin(actor)
        today = today or today_local()
        year = int(year or today.year)
        month = int(month or today.month)
        if not 1 <= month <= 12:
            raise ValidationError("Invalid month")
        # Months after the current one are never shown.
        if (year, month) > (today.year, today.month):
            year, month = today.year, today.month

        marks = self._attendance.get_month(cookies=actor.cookies, user_id=int(user_id), year=year, month=month)
        return AttendanceMonth(year=year, month=month, today=today, marks=marks)
