from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PunchType


@dataclass(frozen=True)
class PunchEvent:
    """Domain entity: a single clock-in/out or break-start/end action.

    Immutable once recorded; the calendar day is the local date of recorded_at.
    """

    punch_id: int
    user_id: int
    punch_type: PunchType
    recorded_at: datetime
    location_id: Optional[int] = None
    location_name: Optional[str] = None
    note: Optional[str] = None
