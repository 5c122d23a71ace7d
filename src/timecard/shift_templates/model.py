from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import ShiftType

ALL_WEEKDAYS = (1, 2, 3, 4, 5, 6, 7)


@dataclass(frozen=True)
class ShiftTemplate:
    """Domain entity: a reusable shift pattern for one location.

    applicable_days holds ISO weekdays (1 = Monday ... 7 = Sunday).
    """

    template_id: Optional[int]
    location_id: int
    name: str
    shift_type: ShiftType
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    description: Optional[str] = None
    applicable_days: tuple[int, ...] = ALL_WEEKDAYS
    is_active: bool = True

    def applies_on(self, day: date) -> bool:
        return day.isoweekday() in self.applicable_days

    def to_dict(self) -> dict:
        return {
            "template_id": self.template_id,
            "location_id": self.location_id,
            "name": self.name,
            "shift_type": self.shift_type.value,
            "start_time": self.start_time.strftime("%H:%M") if self.start_time else None,
            "end_time": self.end_time.strftime("%H:%M") if self.end_time else None,
            "description": self.description or "",
            "applicable_days": list(self.applicable_days),
            "is_active": self.is_active,
        }
