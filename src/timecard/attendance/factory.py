from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the strategy for each side of the day."""

    def for_arrival(self, *, clock_in: datetime, shift_start: datetime, grace_minutes: int = 0) -> AttendanceStrategy:
        if clock_in <= shift_start + timedelta(minutes=grace_minutes):
            return NormalStrategy()
        return LateStrategy()

    def for_departure(self, *, clock_out: datetime, shift_end: datetime) -> AttendanceStrategy:
        if clock_out < shift_end:
            return EarlyLeaveStrategy()
        return NormalStrategy()
