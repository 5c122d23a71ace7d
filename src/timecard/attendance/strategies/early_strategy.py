from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import minutes_between
from ...core.enums import WorkStatus
from .base import AttendanceStrategy, StatusDecision


class EarlyLeaveStrategy(AttendanceStrategy):
    """Clock-out before the shift end."""

    def decide_arrival(self, *, clock_in: datetime, shift_start: datetime) -> StatusDecision:
        return StatusDecision(status=WorkStatus.NORMAL)

    def decide_departure(self, *, clock_out: datetime, shift_end: datetime) -> StatusDecision:
        return StatusDecision(status=WorkStatus.EARLY_LEAVE, minutes=max(0, minutes_between(clock_out, shift_end)))
