"""Swappable rules for the parts of derivation with more than one sensible answer.

Each policy is a plain callable injected into AttendanceDeriver.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Optional, Sequence

from ..core.enums import PunchType, WorkStatus
from ..punches.model import PunchEvent
from .strategies.base import StatusDecision

PairingPolicy = Callable[[Sequence[PunchEvent]], tuple[Optional[datetime], Optional[datetime]]]
OvernightPolicy = Callable[[datetime, datetime], datetime]
ConflictPolicy = Callable[[StatusDecision, StatusDecision], WorkStatus]


def first_in_last_out(punches: Sequence[PunchEvent]) -> tuple[Optional[datetime], Optional[datetime]]:
    """Earliest clock-in and latest clock-out of the day."""

    ins = [p.recorded_at for p in punches if p.punch_type == PunchType.CLOCK_IN]
    outs = [p.recorded_at for p in punches if p.punch_type == PunchType.CLOCK_OUT]
    return (min(ins) if ins else None, max(outs) if outs else None)


def wrap_overnight(clock_in: datetime, clock_out: datetime) -> datetime:
    """A clock-out before the clock-in belongs to the following day."""

    if clock_out < clock_in:
        return clock_out + timedelta(days=1)
    return clock_out


def no_overnight(clock_in: datetime, clock_out: datetime) -> datetime:
    return clock_out


def needs_review_on_conflict(arrival: StatusDecision, departure: StatusDecision) -> WorkStatus:
    """Late and early leave on the same day cannot be summarized by one label."""

    flagged = [d.status for d in (arrival, departure) if d.status != WorkStatus.NORMAL]
    if len(flagged) > 1:
        return WorkStatus.NEEDS_REVIEW
    return flagged[0] if flagged else WorkStatus.NORMAL


def late_takes_precedence(arrival: StatusDecision, departure: StatusDecision) -> WorkStatus:
    if arrival.status != WorkStatus.NORMAL:
        return arrival.status
    return departure.status
