from datetime import datetime

from timecard.attendance.policies import first_in_last_out, late_takes_precedence, needs_review_on_conflict, wrap_overnight
from timecard.attendance.strategies.base import StatusDecision
from timecard.core.enums import PunchType, WorkStatus
from timecard.punches.model import PunchEvent

NORMAL = StatusDecision(WorkStatus.NORMAL)
LATE = StatusDecision(WorkStatus.LATE, 10)
EARLY = StatusDecision(WorkStatus.EARLY_LEAVE, 10)


def test_first_in_last_out_ignores_breaks():
    punches = [
        PunchEvent(1, 1, PunchType.BREAK_START, datetime(2026, 1, 5, 7, 0)),
        PunchEvent(2, 1, PunchType.CLOCK_IN, datetime(2026, 1, 5, 9, 0)),
        PunchEvent(3, 1, PunchType.CLOCK_IN, datetime(2026, 1, 5, 8, 0)),
        PunchEvent(4, 1, PunchType.CLOCK_OUT, datetime(2026, 1, 5, 17, 0)),
    ]

    assert first_in_last_out(punches) == (datetime(2026, 1, 5, 8, 0), datetime(2026, 1, 5, 17, 0))


def test_first_in_last_out_without_punches():
    assert first_in_last_out([]) == (None, None)


def test_wrap_overnight_only_when_out_precedes_in():
    clock_in = datetime(2026, 1, 5, 22, 0)

    assert wrap_overnight(clock_in, datetime(2026, 1, 5, 23, 0)) == datetime(2026, 1, 5, 23, 0)
    assert wrap_overnight(clock_in, datetime(2026, 1, 5, 6, 0)) == datetime(2026, 1, 6, 6, 0)


def test_needs_review_on_conflict():
    assert needs_review_on_conflict(NORMAL, NORMAL) == WorkStatus.NORMAL
    assert needs_review_on_conflict(LATE, NORMAL) == WorkStatus.LATE
    assert needs_review_on_conflict(NORMAL, EARLY) == WorkStatus.EARLY_LEAVE
    assert needs_review_on_conflict(LATE, EARLY) == WorkStatus.NEEDS_REVIEW


def test_late_takes_precedence():
    assert late_takes_precedence(LATE, EARLY) == WorkStatus.LATE
    assert late_takes_precedence(NORMAL, EARLY) == WorkStatus.EARLY_LEAVE
