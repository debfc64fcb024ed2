from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date


@dataclass(frozen=True)
class TimeLog:
    log_id: Optional[int]
    hours: Decimal
    description: str
    date_logged: Optional[date]
    username: str = ""

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "TimeLog":
        try:
            hours = Decimal(str(data.get("hoursLogged") or 0))
        except InvalidOperation:
            hours = Decimal(0)
        try:
            logged = parse_iso_date(str(data["dateLogged"])[:10]) if data.get("dateLogged") else None
        except ValueError:
            logged = None
        user = data.get("user") or {}
        return cls(
            log_id=int(data["id"]) if data.get("id") is not None else None,
            hours=hours,
            description=data.get("workDescription") or "",
            date_logged=logged,
            username=user.get("username") or "",
        )


@dataclass(frozen=True)
class TimeLogEntry:
    """A validated entry ready to be submitted."""

    task_id: int
    hours: Decimal
    description: str
    date_logged: date

    def as_form(self) -> dict[str, str]:
        return {
            "hoursWorked": str(self.hours),
            "description": self.description,
            "dateLogged": self.date_logged.isoformat(),
        }
