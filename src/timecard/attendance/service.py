from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from ..break_policy.model import BreakPolicy, select_break_policy
from ..break_policy.repository import BreakPolicyRepository
from ..common.datetime_utils import format_minutes, iter_dates
from ..core.enums import PunchType
from ..core.exceptions import ValidationError
from ..punches.model import PunchEvent
from ..punches.repository import PunchRepository
from ..punches.sessions import is_fresh, leading_clock_out, open_session
from ..shifts.model import ShiftAssignment
from ..shifts.repository import ShiftRepository
from .deriver import AttendanceDeriver
from .label_service import StatusLabelService
from .model import DailyAttendanceRecord, StatusLabels

logger = logging.getLogger(__name__)


def _fmt_time(value) -> Optional[str]:
    return value.strftime("%H:%M") if value else None


def attach_overnight_clock_outs(punches_by_day: dict[date, list[PunchEvent]], first: date, last: date) -> None:
    """Move a clock-out that closes the previous day's session back onto that day.

    Punches before (and including) the first clock-out of a day belong to the
    previous day when that day ends with an open session. Mutates the mapping.
    """

    for day in iter_dates(first, last - timedelta(days=1)):
        following_day = day + timedelta(days=1)
        session = open_session(punches_by_day.get(day, []))
        following = punches_by_day.get(following_day, [])
        if not session or not following:
            continue

        cut = leading_clock_out(following)
        if cut is None or not is_fresh(session, following[cut].recorded_at):
            continue
        punches_by_day[day] = punches_by_day[day] + following[: cut + 1]
        punches_by_day[following_day] = following[cut + 1 :]


def _day_location(punches: Sequence[PunchEvent]) -> Optional[int]:
    """Location of the first clock-in, which selects a location-scoped break policy."""
    for p in punches:
        if p.punch_type == PunchType.CLOCK_IN and p.location_id is not None:
            return p.location_id
    return None


class AttendanceService:
    """Use case: fetch a user's raw data once per range and derive each day."""

    def __init__(
        self,
        punches: PunchRepository,
        shifts: ShiftRepository,
        break_policies: BreakPolicyRepository,
        *,
        deriver: AttendanceDeriver | None = None,
        labels: StatusLabels | None = None,
        label_service: StatusLabelService | None = None,
    ):
        self._punches = punches
        self._shifts = shifts
        self._break_policies = break_policies
        self._deriver = deriver or AttendanceDeriver()
        self._label_service = label_service or StatusLabelService(base=labels)

    def records_for_range(self, user_id: int, start: date, end: date) -> list[DailyAttendanceRecord]:
        """One record per calendar day from start to end inclusive."""

        if end < start:
            raise ValidationError("End date must not be before start date")

        # One day either side so sessions crossing midnight at the range edges pair up.
        punches = self._punches.list_for_user_between(
            user_id=user_id,
            start=datetime.combine(start - timedelta(days=1), time.min),
            end=datetime.combine(end + timedelta(days=2), time.min),
        )
        punches_by_day: dict[date, list[PunchEvent]] = defaultdict(list)
        for p in punches:
            if not isinstance(p.recorded_at, datetime):
                logger.warning("punch %s of user %s has no usable timestamp; ignored", p.punch_id, user_id)
                continue
            punches_by_day[p.recorded_at.date()].append(p)
        attach_overnight_clock_outs(punches_by_day, start - timedelta(days=1), end + timedelta(days=1))

        shifts_by_day: dict[date, ShiftAssignment] = {}
        for s in self._shifts.list_for_user_between(user_id=user_id, start=start, end=end):
            if s.shift_date in shifts_by_day:
                logger.warning("user %s has more than one shift on %s; using the last", user_id, s.shift_date)
            shifts_by_day[s.shift_date] = s

        policies: Sequence[BreakPolicy] = self._break_policies.list_active()

        records = []
        for day in iter_dates(start, end):
            day_punches = punches_by_day.get(day, [])
            policy = select_break_policy(policies, work_date=day, location_id=_day_location(day_punches))
            records.append(
                self._deriver.derive(
                    work_date=day,
                    punches=day_punches,
                    shift=shifts_by_day.get(day),
                    policy=policy,
                    user_id=user_id,
                )
            )
        return records

    def daily_record(self, user_id: int, work_date: date) -> DailyAttendanceRecord:
        return self.records_for_range(user_id, work_date, work_date)[0]

    def labels_for(self, work_date: date) -> StatusLabels:
        return self._label_service.labels_for(work_date)

    def rows(self, records: Sequence[DailyAttendanceRecord]) -> list[dict]:
        resolve = self._label_service.resolver()
        return [self.to_row(r, labels=resolve(r.work_date)) for r in records]

    def to_row(self, r: DailyAttendanceRecord, *, labels: StatusLabels | None = None) -> dict:
        labels = labels or self._label_service.labels_for(r.work_date)
        return {
            "user_id": r.user_id,
            "date": r.work_date.strftime("%Y-%m-%d"),
            "shift_type": r.shift_type.value if r.shift_type else None,
            "shift_start": _fmt_time(r.shift_start),
            "shift_end": _fmt_time(r.shift_end),
            "clock_in": _fmt_time(r.clock_in),
            "clock_out": _fmt_time(r.clock_out),
            "break_start": _fmt_time(r.break_start),
            "break_end": _fmt_time(r.break_end),
            "break_minutes": r.break_minutes,
            "bound_minutes": r.bound_minutes,
            "actual_minutes": r.actual_minutes,
            "overtime_minutes": r.overtime_minutes,
            "late_minutes": r.late_minutes,
            "early_leave_minutes": r.early_leave_minutes,
            "actual_hours": format_minutes(r.actual_minutes),
            "status": r.status.value,
            "status_label": labels.label_for(r.status),
        }
