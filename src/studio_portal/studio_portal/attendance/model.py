from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date, shift_month
from ..core.enums import AttendanceMark


def parse_marks(data: Optional[Mapping[str, Any]]) -> dict[date, AttendanceMark]:
    """``{"YYYY-MM-DD": "present"}`` body into a dict keyed by date; unknown values are skipped."""
    marks: dict[date, AttendanceMark] = {}
    for key, value in (data or {}).items():
        try:
            marks[parse_iso_date(str(key))] = AttendanceMark(str(value))
        except ValueError:
            continue
    return marks


@dataclass(frozen=True)
class CalendarCell:
    day: int
    mark: Optional[AttendanceMark] = None
    is_today: bool = False

    @property
    def css_class(self) -> str:
        classes = ["calendar-day"]
        if self.mark:
            classes.append(self.mark.value)
        if self.is_today:
            classes.append("today")
        return " ".join(classes)


@dataclass(frozen=True)
class AttendanceStats:
    present_days: int = 0
    absent_days: int = 0
    working_days: int = 0

    @property
    def attendance_rate(self) -> int:
        if not self.working_days:
            return 0
        return round(self.present_days * 100 / self.working_days)


@dataclass(frozen=True)
class AttendanceMonth:
    year: int
    month: int
    today: date
    marks: Mapping[date, AttendanceMark] = field(default_factory=dict)

    @property
    def title(self) -> str:
        return f"{calendar.month_name[self.month]} {self.year}"

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    def mark_for(self, day: int) -> Optional[AttendanceMark]:
        return self.marks.get(date(self.year, self.month, day))

    def cells(self) -> list[Optional[CalendarCell]]:
        """Sunday-first cells; ``None`` pads the days before the 1st."""
        first_weekday = date(self.year, self.month, 1).weekday()
        # date.weekday() is Monday=0, the grid starts on Sunday.
        leading = (first_weekday + 1) % 7
        cells: list[Optional[CalendarCell]] = [None] * leading
        for day in range(1, self.days_in_month + 1):
            cells.append(
                CalendarCell(day=day, mark=self.mark_for(day), is_today=date(self.year, self.month, day) == self.today)
            )
        return cells

    def weeks(self) -> list[list[Optional[CalendarCell]]]:
        cells = self.cells()
        cells += [None] * (-len(cells) % 7)
        return [cells[i:i + 7] for i in range(0, len(cells), 7)]

    def stats(self) -> AttendanceStats:
        """Counts over working days (Sundays excluded).

        For the month that contains yesterday, only days up to yesterday count.
        """
        yesterday = self.today - timedelta(days=1)
        if (yesterday.year, yesterday.month) == (self.year, self.month):
            last_day = yesterday.day
        else:
            last_day = self.days_in_month

        present = absent = working = 0
        for day in range(1, last_day + 1):
            current = date(self.year, self.month, day)
            if current.weekday() == calendar.SUNDAY:
                continue
            working += 1
            mark = self.marks.get(current)
            if mark is AttendanceMark.PRESENT:
                present += 1
            elif mark is AttendanceMark.ABSENT:
                absent += 1
        return AttendanceStats(present_days=present, absent_days=absent, working_days=working)

    def previous_month(self) -> tuple[int, int]:
        return shift_month(self.year, self.month, -1)

    def next_month(self) -> Optional[tuple[int, int]]:
        """The following month, or None when it would be past the current month."""
        nxt = shift_month(self.year, self.month, 1)
        if nxt > (self.today.year, self.today.month):
            return None
        return nxt
