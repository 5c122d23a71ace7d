"""Work sessions that run past midnight.

A session starts at a clock-in and ends at the next clock-out. Punches are
stored per timestamp, so a night shift's clock-out lands on the next
calendar day; these helpers tie it back to the clock-in it closes.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Sequence

from ..core.constants import MAX_OPEN_SESSION_HOURS
from ..core.enums import PunchType
from .model import PunchEvent

MAX_OPEN_SESSION = timedelta(hours=MAX_OPEN_SESSION_HOURS)


def open_session(punches: Sequence[PunchEvent]) -> list[PunchEvent]:
    """Punches from the last clock-in on, if no clock-out has closed it yet."""

    start: Optional[int] = None
    for i, p in enumerate(punches):
        if p.punch_type == PunchType.CLOCK_IN:
            start = i
        elif p.punch_type == PunchType.CLOCK_OUT:
            start = None
    return list(punches[start:]) if start is not None else []


def is_fresh(session: Sequence[PunchEvent], at: datetime) -> bool:
    return bool(session) and at - session[0].recorded_at <= MAX_OPEN_SESSION


def leading_clock_out(punches: Sequence[PunchEvent]) -> Optional[int]:
    """Index of a clock-out that comes before any clock-in, else None."""

    for i, p in enumerate(punches):
        if p.punch_type == PunchType.CLOCK_IN:
            return None
        if p.punch_type == PunchType.CLOCK_OUT:
            return i
    return None
