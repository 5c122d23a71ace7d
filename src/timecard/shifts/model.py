from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import ShiftStatus, ShiftType


@dataclass(frozen=True)
class ShiftAssignment:
    """Domain entity: the planned work window of one user on one date."""

    shift_id: int
    user_id: int
    shift_date: date
    shift_type: ShiftType
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    status: ShiftStatus = ShiftStatus.ADJUSTING
    note: Optional[str] = None

    @property
    def has_window(self) -> bool:
        """True when the shift defines a start/end that punches are judged against."""
        return self.shift_type != ShiftType.OFF and self.start_time is not None and self.end_time is not None
