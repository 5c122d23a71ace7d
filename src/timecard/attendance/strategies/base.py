from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...core.enums import WorkStatus


@dataclass(frozen=True)
class StatusDecision:
    """Judgment of one side of the day (arrival or departure)."""

    status: WorkStatus
    minutes: int = 0


class AttendanceStrategy(ABC):
    """Strategy Pattern: how one punch compares with the shift window."""

    @abstractmethod
    def decide_arrival(self, *, clock_in: datetime, shift_start: datetime) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_departure(self, *, clock_out: datetime, shift_end: datetime) -> StatusDecision:
        raise NotImplementedError
