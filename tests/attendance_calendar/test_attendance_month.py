from __future__ import annotations

from datetime import date

import pytest

from src.studio_portal.studio_portal.attendance.model import AttendanceMonth, parse_marks
from src.studio_portal.studio_portal.attendance.service import AttendanceService
from src.studio_portal.studio_portal.core.enums import AttendanceMark
from src.studio_portal.studio_portal.core.exceptions import AuthorizationError
from src.studio_portal.studio_portal.users.model import UserSession

ADMIN = UserSession(user_id=1, username="admin", name="Admin", authorities=("ROLE_ADMIN",), cookies={"JSESSIONID": "a"})
USER = UserSession(user_id=2, username="user", name="User", authorities=("ROLE_USER",))


class FakeAttendance:
    def __init__(self, marks=None):
        self.marks = marks or {}
        self.calls = []

    def get_month(self, *, cookies, user_id, year, month):
        self.calls.append((dict(cookies), user_id, year, month))
        return self.marks


def test_grid_is_sunday_first_with_leading_blanks():
    # 1 March 2026 is a Sunday, 1 April 2026 a Wednesday.
    march = AttendanceMonth(year=2026, month=3, today=date(2026, 4, 10))
    assert march.cells()[0].day == 1

    april = AttendanceMonth(year=2026, month=4, today=date(2026, 4, 10))
    cells = april.cells()
    assert cells[:3] == [None, None, None]
    assert cells[3].day == 1
    assert len(cells) == 3 + 30
    assert all(len(week) == 7 for week in april.weeks())
    assert [c for c in cells if c and c.is_today][0].day == 10


def test_parse_marks_skips_unknown_values():
    marks = parse_marks({"2026-04-01": "present", "2026-04-02": "absent", "2026-04-03": "holiday", "bad": "present"})
    assert marks == {date(2026, 4, 1): AttendanceMark.PRESENT, date(2026, 4, 2): AttendanceMark.ABSENT}


def test_stats_stop_at_yesterday_and_skip_sundays():
    marks = parse_marks(
        {
            "2026-04-01": "present",
            "2026-04-02": "absent",
            "2026-04-05": "present",  # Sunday
            "2026-04-09": "present",
            "2026-04-10": "present",  # today, not counted yet
        }
    )
    stats = AttendanceMonth(year=2026, month=4, today=date(2026, 4, 10), marks=marks).stats()

    # 1..9 April minus Sunday the 5th.
    assert stats.working_days == 8
    assert stats.present_days == 2
    assert stats.absent_days == 1


def test_stats_cover_whole_past_month():
    stats = AttendanceMonth(year=2026, month=2, today=date(2026, 4, 10)).stats()
    # February 2026: 28 days, 4 Sundays.
    assert stats.working_days == 24
    assert stats.attendance_rate == 0


def test_navigation_never_passes_current_month():
    current = AttendanceMonth(year=2026, month=4, today=date(2026, 4, 10))
    assert current.previous_month() == (2026, 3)
    assert current.next_month() is None

    december = AttendanceMonth(year=2025, month=12, today=date(2026, 4, 10))
    assert december.next_month() == (2026, 1)

    # Previous-year month later in the calendar than the current month.
    may_last_year = AttendanceMonth(year=2025, month=5, today=date(2026, 4, 10))
    assert may_last_year.next_month() == (2025, 6)


def test_service_clamps_future_months_and_requires_admin():
    repo = FakeAttendance({date(2026, 4, 1): AttendanceMark.PRESENT})
    service = AttendanceService(repo)

    month = service.month(ADMIN, 7, year=2027, month=1, today=date(2026, 4, 10))
    assert (month.year, month.month) == (2026, 4)
    assert repo.calls == [({"JSESSIONID": "a"}, 7, 2026, 4)]

    with pytest.raises(AuthorizationError):
        service.month(USER, 7, today=date(2026, 4, 10))
