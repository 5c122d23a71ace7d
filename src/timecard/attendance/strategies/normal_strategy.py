from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import minutes_between
from ...core.enums import WorkStatus
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """On time (or within grace). Early arrival and staying late are normal too."""

    def decide_arrival(self, *, clock_in: datetime, shift_start: datetime) -> StatusDecision:
        # Inside the grace window the raw lateness is still reported.
        return StatusDecision(status=WorkStatus.NORMAL, minutes=max(0, minutes_between(shift_start, clock_in)))

    def decide_departure(self, *, clock_out: datetime, shift_end: datetime) -> StatusDecision:
        return StatusDecision(status=WorkStatus.NORMAL)
