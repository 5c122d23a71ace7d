from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from ..break_policy.model import DEFAULT_BREAK_POLICY, BreakPolicy
from ..common.datetime_utils import minutes_between, truncate_to_minute
from ..core.constants import DEFAULT_LATE_GRACE_MINUTES, STANDARD_WORK_MINUTES
from ..core.enums import PunchType, ShiftType, WorkStatus
from ..punches.model import PunchEvent
from ..shifts.model import ShiftAssignment
from .factory import AttendanceStrategyFactory
from .model import DailyAttendanceRecord
from .policies import (
    ConflictPolicy,
    OvernightPolicy,
    PairingPolicy,
    first_in_last_out,
    needs_review_on_conflict,
    wrap_overnight,
)

logger = logging.getLogger(__name__)


def _valid_punches(punches: Sequence[PunchEvent]) -> list[PunchEvent]:
    valid = [p for p in punches if isinstance(p.recorded_at, datetime) and isinstance(p.punch_type, PunchType)]
    if len(valid) != len(punches):
        logger.debug("skipped %d malformed punches", len(punches) - len(valid))
    return sorted(valid, key=lambda p: p.recorded_at)


def _shift_window(work_date: date, shift: Optional[ShiftAssignment]) -> Optional[tuple[datetime, datetime]]:
    if shift is None or not shift.has_window:
        return None
    if not isinstance(shift.start_time, time) or not isinstance(shift.end_time, time):
        return None

    start = datetime.combine(work_date, shift.start_time)
    end = datetime.combine(work_date, shift.end_time)
    if end <= start:
        end += timedelta(days=1)
    return start, end


class AttendanceDeriver:
    """Derive one DailyAttendanceRecord from a day's punches, shift and break policy.

    Pure and stateless. Break punches are reported but never drive the break
    duration; the break policy alone decides it.
    """

    def __init__(
        self,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        pairing: PairingPolicy = first_in_last_out,
        overnight: OvernightPolicy = wrap_overnight,
        conflict: ConflictPolicy = needs_review_on_conflict,
        grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
        standard_work_minutes: int = STANDARD_WORK_MINUTES,
    ):
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._pairing = pairing
        self._overnight = overnight
        self._conflict = conflict
        self._grace_minutes = int(grace_minutes)
        self._standard_work_minutes = int(standard_work_minutes)

    def derive(
        self,
        *,
        work_date: date,
        punches: Sequence[PunchEvent] = (),
        shift: Optional[ShiftAssignment] = None,
        policy: Optional[BreakPolicy] = None,
        user_id: Optional[int] = None,
    ) -> DailyAttendanceRecord:
        policy = policy or DEFAULT_BREAK_POLICY
        punches = _valid_punches(punches)

        clock_in, clock_out = self._pairing(punches)
        clock_in = truncate_to_minute(clock_in) if clock_in else None
        clock_out = truncate_to_minute(clock_out) if clock_out else None
        break_starts = [p.recorded_at for p in punches if p.punch_type == PunchType.BREAK_START]
        break_ends = [p.recorded_at for p in punches if p.punch_type == PunchType.BREAK_END]

        has_shift = shift is not None and shift.shift_type != ShiftType.OFF
        base = dict(
            work_date=work_date,
            user_id=user_id,
            shift_type=shift.shift_type if shift else None,
            shift_start=shift.start_time if shift else None,
            shift_end=shift.end_time if shift else None,
            clock_in=clock_in,
            clock_out=clock_out,
            break_start=min(break_starts) if break_starts else None,
            break_end=max(break_ends) if break_ends else None,
        )

        if clock_in is None:
            return DailyAttendanceRecord(status=WorkStatus.ABSENT if has_shift else WorkStatus.EMPTY, **base)

        window = _shift_window(work_date, shift)
        late_minutes = 0
        arrival = None
        if window:
            shift_start, _ = window
            arrival = self._factory.for_arrival(
                clock_in=clock_in, shift_start=shift_start, grace_minutes=self._grace_minutes
            ).decide_arrival(clock_in=clock_in, shift_start=shift_start)
            late_minutes = arrival.minutes

        if clock_out is None:
            # Departure cannot be judged until the user clocks out.
            status = WorkStatus.NEEDS_REVIEW if has_shift else WorkStatus.NORMAL
            return DailyAttendanceRecord(status=status, late_minutes=late_minutes, **base)

        effective_out = self._overnight(clock_in, clock_out)
        bound = max(0, minutes_between(clock_in, effective_out))
        break_minutes = policy.break_minutes_for(bound)
        actual = max(0, bound - break_minutes)
        overtime = max(0, actual - self._standard_work_minutes)

        early_minutes = 0
        status = WorkStatus.NORMAL
        if window and arrival is not None:
            _, shift_end = window
            departure = self._factory.for_departure(clock_out=effective_out, shift_end=shift_end).decide_departure(
                clock_out=effective_out, shift_end=shift_end
            )
            early_minutes = departure.minutes
            status = self._conflict(arrival, departure)

        return DailyAttendanceRecord(
            status=status,
            break_minutes=break_minutes,
            bound_minutes=bound,
            actual_minutes=actual,
            overtime_minutes=overtime,
            late_minutes=late_minutes,
            early_leave_minutes=early_minutes,
            **base,
        )
