from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for permission checks."""

    ADMIN = "admin"
    STAFF = "staff"


class PunchType(str, Enum):
    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
    BREAK_START = "break_start"
    BREAK_END = "break_end"


class ShiftType(str, Enum):
    EARLY = "early"
    LATE = "late"
    NORMAL = "normal"
    OFF = "off"


class ShiftStatus(str, Enum):
    """Shift approval state: staff edit while ADJUSTING, admins confirm."""

    ADJUSTING = "adjusting"
    CONFIRMED = "confirmed"


class WorkStatus(str, Enum):
    """Derived attendance status of one day."""

    EMPTY = "EMPTY"
    NORMAL = "NORMAL"
    LATE = "LATE"
    EARLY_LEAVE = "EARLY_LEAVE"
    ABSENT = "ABSENT"
    NEEDS_REVIEW = "NEEDS_REVIEW"


class PunchState(str, Enum):
    """Where a user currently is in today's punch sequence."""

    NOT_STARTED = "NOT_STARTED"
    WORKING = "WORKING"
    ON_BREAK = "ON_BREAK"
    FINISHED = "FINISHED"
