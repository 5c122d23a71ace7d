from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from ..attendance.model import DailyAttendanceRecord
from ..attendance.service import AttendanceService
from ..common.datetime_utils import format_minutes, month_range
from ..core.enums import WorkStatus
from ..core.exceptions import ValidationError
from ..users.repository import UserRepository


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict


def summarize(records: Iterable[DailyAttendanceRecord]) -> dict:
    """Totals over a set of days (typically one user's month)."""

    summary = {
        "work_days": 0,
        "absent_days": 0,
        "late_days": 0,
        "early_leave_days": 0,
        "needs_review_days": 0,
        "bound_minutes": 0,
        "break_minutes": 0,
        "actual_minutes": 0,
        "overtime_minutes": 0,
        "late_minutes": 0,
        "early_leave_minutes": 0,
    }
    day_counters = {
        WorkStatus.ABSENT: "absent_days",
        WorkStatus.LATE: "late_days",
        WorkStatus.EARLY_LEAVE: "early_leave_days",
        WorkStatus.NEEDS_REVIEW: "needs_review_days",
    }

    for r in records:
        if r.clock_in is not None:
            summary["work_days"] += 1
        counter = day_counters.get(r.status)
        if counter:
            summary[counter] += 1
        for key in ("bound_minutes", "break_minutes", "actual_minutes", "overtime_minutes", "late_minutes", "early_leave_minutes"):
            summary[key] += getattr(r, key)

    summary["actual_hours"] = format_minutes(summary["actual_minutes"])
    summary["overtime_hours"] = format_minutes(summary["overtime_minutes"])
    return summary


class AttendanceReportService:
    def __init__(self, attendance: AttendanceService, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def monthly(self, *, user_id: int, year: int, month: int) -> ReportData:
        if not 1 <= int(month) <= 12:
            raise ValidationError("Month must be between 1 and 12")

        start, end = month_range(int(year), int(month))
        records = self._attendance.records_for_range(user_id, start, end)
        summary = summarize(records)
        summary.update({"user_id": user_id, "year": int(year), "month": int(month)})
        return ReportData(rows=self._attendance.rows(records), summary=summary)

    def daily_overview(self, *, work_date: date) -> list[dict]:
        """One row per active user for an admin's view of a single day."""

        labels = self._attendance.labels_for(work_date)
        rows = []
        for user in self._users.list_active():
            row = self._attendance.to_row(self._attendance.daily_record(user.user_id, work_date), labels=labels)
            row["display_name"] = user.display_name
            rows.append(row)
        return rows
