from datetime import datetime

from timecard.attendance.factory import AttendanceStrategyFactory
from timecard.attendance.strategies.early_strategy import EarlyLeaveStrategy
from timecard.attendance.strategies.late_strategy import LateStrategy
from timecard.attendance.strategies.normal_strategy import NormalStrategy
from timecard.core.enums import WorkStatus

SHIFT_START = datetime(2026, 1, 5, 8, 0)
SHIFT_END = datetime(2026, 1, 5, 17, 0)


def test_factory_arrival_on_time_within_grace():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_arrival(clock_in=datetime(2026, 1, 5, 8, 4), shift_start=SHIFT_START, grace_minutes=5)

    assert isinstance(strategy, NormalStrategy)


def test_factory_arrival_late_after_grace():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_arrival(clock_in=datetime(2026, 1, 5, 8, 6), shift_start=SHIFT_START, grace_minutes=5)

    assert isinstance(strategy, LateStrategy)
    decision = strategy.decide_arrival(clock_in=datetime(2026, 1, 5, 8, 6), shift_start=SHIFT_START)
    assert decision.status == WorkStatus.LATE
    assert decision.minutes == 6


def test_factory_departure_early():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_departure(clock_out=datetime(2026, 1, 5, 16, 45), shift_end=SHIFT_END)

    assert isinstance(strategy, EarlyLeaveStrategy)
    decision = strategy.decide_departure(clock_out=datetime(2026, 1, 5, 16, 45), shift_end=SHIFT_END)
    assert decision.status == WorkStatus.EARLY_LEAVE
    assert decision.minutes == 15


def test_factory_departure_at_end_is_normal():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_departure(clock_out=SHIFT_END, shift_end=SHIFT_END)

    assert isinstance(strategy, NormalStrategy)
    assert strategy.decide_departure(clock_out=SHIFT_END, shift_end=SHIFT_END).status == WorkStatus.NORMAL
