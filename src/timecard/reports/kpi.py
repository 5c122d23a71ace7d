from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timedelta

from ..common.datetime_utils import day_bounds, month_range
from ..core.enums import PunchType, ShiftStatus, ShiftType
from ..daily_reports.repository import DailyReportRepository
from ..punches.model import PunchEvent
from ..punches.repository import PunchRepository
from ..punches.sessions import is_fresh, open_session
from ..shifts.repository import ShiftRepository
from ..users.repository import UserRepository


class KpiService:
    """Dashboard figures for admins: today's attendance, sales and the month's shifts."""

    def __init__(
        self,
        users: UserRepository,
        punches: PunchRepository,
        shifts: ShiftRepository,
        daily_reports: DailyReportRepository,
    ):
        self._users = users
        self._punches = punches
        self._shifts = shifts
        self._daily_reports = daily_reports

    def summary(self, *, now: datetime) -> dict:
        today = now.date()
        month_start, month_end = month_range(today.year, today.month)
        today_start, today_end = day_bounds(today)

        window_start = min(datetime.combine(month_start, datetime.min.time()), today_start - timedelta(days=1))
        punches = self._punches.list_between(start=window_start, end=today_end)
        by_user: dict[int, list[PunchEvent]] = defaultdict(list)
        for p in punches:
            by_user[p.user_id].append(p)

        today_attendance = len(
            {p.user_id for p in punches if p.punch_type == PunchType.CLOCK_IN and p.recorded_at >= today_start}
        )

        working = on_break = 0
        for user_punches in by_user.values():
            session = open_session([p for p in user_punches if p.recorded_at >= today_start - timedelta(days=1)])
            if not is_fresh(session, now):
                continue
            if session[-1].punch_type == PunchType.BREAK_START:
                on_break += 1
            else:
                working += 1

        reports = self._daily_reports.list_range(start=today, end=today)
        today_sales = sum(r.sales_amount for r in reports)

        shifts = self._shifts.list_range(start=month_start, end=month_end)
        clock_in_days = {
            (p.user_id, p.recorded_at.date()) for p in punches if p.punch_type == PunchType.CLOCK_IN
        }
        scheduled = [s for s in shifts if s.shift_type != ShiftType.OFF and s.shift_date <= today]
        attended = [s for s in scheduled if (s.user_id, s.shift_date) in clock_in_days]

        return {
            "date": today.strftime("%Y-%m-%d"),
            "total_users": len(self._users.list_active()),
            "today_attendance": today_attendance,
            "currently_working": working,
            "on_break": on_break,
            "today_sales": today_sales,
            "avg_sales_per_report": round(today_sales / len(reports)) if reports else 0,
            "month_shifts": len(shifts),
            "month_confirmed_shifts": sum(1 for s in shifts if s.status == ShiftStatus.CONFIRMED),
            "monthly_attendance_rate": round(len(attended) * 100 / len(scheduled)) if scheduled else 0,
        }
