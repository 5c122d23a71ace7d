from datetime import date, datetime, time

import pytest

from timecard.attendance.label_service import StatusLabelService
from timecard.attendance.model import StatusLabels
from timecard.attendance.service import AttendanceService, attach_overnight_clock_outs
from timecard.break_policy.model import BreakPolicy, BreakRule
from timecard.core.enums import PunchType, Role, ShiftType, WorkStatus
from timecard.core.exceptions import ValidationError
from timecard.punches.model import PunchEvent
from timecard.punches.service import PunchService


@pytest.fixture
def svc(punches_repo, shifts_repo, policies_repo):
    return AttendanceService(punches_repo, shifts_repo, policies_repo)


def test_one_record_per_day_in_range(svc, punches_repo, shifts_repo):
    shifts_repo.add(1, date(2026, 2, 2), time(9, 0), time(18, 0))
    shifts_repo.add(1, date(2026, 2, 3), time(9, 0), time(18, 0))
    shifts_repo.add(1, date(2026, 2, 4), None, None, shift_type=ShiftType.OFF)
    punches_repo.add(1, PunchType.CLOCK_IN, datetime(2026, 2, 2, 9, 10))
    punches_repo.add(1, PunchType.CLOCK_OUT, datetime(2026, 2, 2, 18, 0))
    punches_repo.add(2, PunchType.CLOCK_IN, datetime(2026, 2, 3, 9, 0))

    records = svc.records_for_range(1, date(2026, 2, 1), date(2026, 2, 4))

    assert [r.work_date.day for r in records] == [1, 2, 3, 4]
    assert [r.status for r in records] == [WorkStatus.EMPTY, WorkStatus.LATE, WorkStatus.ABSENT, WorkStatus.EMPTY]
    assert records[1].late_minutes == 10
    assert all(r.user_id == 1 for r in records)


def test_location_policy_follows_first_clock_in(svc, punches_repo, policies_repo):
    policies_repo.save(BreakPolicy(name="shop", rules=(BreakRule(0, None, 30),), location_id=5))
    punches_repo.add(1, PunchType.CLOCK_IN, datetime(2026, 2, 2, 9, 0), location_id=5)
    punches_repo.add(1, PunchType.CLOCK_OUT, datetime(2026, 2, 2, 13, 0))
    punches_repo.add(1, PunchType.CLOCK_IN, datetime(2026, 2, 3, 9, 0))
    punches_repo.add(1, PunchType.CLOCK_OUT, datetime(2026, 2, 3, 13, 0))

    shop_day, other_day = svc.records_for_range(1, date(2026, 2, 2), date(2026, 2, 3))

    assert shop_day.break_minutes == 30
    assert shop_day.actual_minutes == 210
    assert other_day.break_minutes == 0


def test_daily_record_and_row(svc, punches_repo):
    punches_repo.add(1, PunchType.CLOCK_IN, datetime(2026, 2, 2, 10, 0))
    punches_repo.add(1, PunchType.CLOCK_OUT, datetime(2026, 2, 2, 19, 0))

    row = svc.to_row(svc.daily_record(1, date(2026, 2, 2)))

    assert row["date"] == "2026-02-02"
    assert row["clock_in"] == "10:00"
    assert row["clock_out"] == "19:00"
    assert row["actual_minutes"] == 480
    assert row["actual_hours"] == "08:00"
    assert row["status"] == "NORMAL"
    assert row["status_label"] == "通常勤務"


def test_labels_can_be_overridden(punches_repo, shifts_repo, policies_repo):
    labels = StatusLabels.from_overrides({"late": "Late", "bogus": "x"})
    svc = AttendanceService(punches_repo, shifts_repo, policies_repo, labels=labels)
    shifts_repo.add(1, date(2026, 2, 2), time(9, 0), time(18, 0))
    punches_repo.add(1, PunchType.CLOCK_IN, datetime(2026, 2, 2, 9, 30))
    punches_repo.add(1, PunchType.CLOCK_OUT, datetime(2026, 2, 2, 18, 0))

    row = svc.to_row(svc.daily_record(1, date(2026, 2, 2)))

    assert row["status_label"] == "Late"
    assert labels.label_for(WorkStatus.ABSENT) == "欠勤"


def test_reversed_range_is_rejected(svc):
    with pytest.raises(ValidationError):
        svc.records_for_range(1, date(2026, 2, 3), date(2026, 2, 2))


def test_night_shift_recorded_through_punch_service(svc, punches_repo, shifts_repo, users_repo):
    punch_service = PunchService(punches_repo, users_repo)
    shifts_repo.add(1, date(2026, 2, 2), time(22, 0), time(6, 0), shift_type=ShiftType.LATE)
    punch_service.record(1, PunchType.CLOCK_IN, now=datetime(2026, 2, 2, 22, 0))
    punch_service.record(1, PunchType.CLOCK_OUT, now=datetime(2026, 2, 3, 6, 0))

    night, next_day = svc.records_for_range(1, date(2026, 2, 2), date(2026, 2, 3))

    assert night.status == WorkStatus.NORMAL
    assert night.bound_minutes == 480
    assert night.break_minutes == 60
    assert night.actual_minutes == 420
    assert night.early_leave_minutes == 0
    assert next_day.status == WorkStatus.EMPTY
    assert next_day.clock_out is None


def test_night_shift_clock_out_is_paired_at_range_start(svc, punches_repo):
    punches_repo.add(1, PunchType.CLOCK_IN, datetime(2026, 2, 1, 23, 0))
    punches_repo.add(1, PunchType.CLOCK_OUT, datetime(2026, 2, 2, 5, 0))
    punches_repo.add(1, PunchType.CLOCK_IN, datetime(2026, 2, 2, 23, 0))
    punches_repo.add(1, PunchType.CLOCK_OUT, datetime(2026, 2, 3, 4, 0))

    (record,) = svc.records_for_range(1, date(2026, 2, 2), date(2026, 2, 2))

    assert record.clock_in == datetime(2026, 2, 2, 23, 0)
    assert record.clock_out == datetime(2026, 2, 3, 4, 0)
    assert record.bound_minutes == 300


def test_stale_open_session_keeps_next_day_punches():
    punches_by_day = {
        date(2026, 2, 2): [PunchEvent(1, 1, PunchType.CLOCK_IN, datetime(2026, 2, 2, 8, 0))],
        date(2026, 2, 3): [PunchEvent(2, 1, PunchType.CLOCK_OUT, datetime(2026, 2, 3, 9, 0))],
    }

    attach_overnight_clock_outs(punches_by_day, date(2026, 2, 2), date(2026, 2, 3))

    assert [p.punch_id for p in punches_by_day[date(2026, 2, 2)]] == [1]
    assert [p.punch_id for p in punches_by_day[date(2026, 2, 3)]] == [2]


def test_default_label_for_needs_review(svc):
    assert svc.labels_for(date(2026, 2, 2)).label_for(WorkStatus.NEEDS_REVIEW) == "判定困難"


def test_saved_labels_apply_from_their_date(punches_repo, shifts_repo, policies_repo, labels_repo):
    labels = StatusLabelService(labels_repo)
    svc = AttendanceService(punches_repo, shifts_repo, policies_repo, label_service=labels)
    labels.save(current_role=Role.ADMIN, labels={"late": "遅刻あり"}, applied_from=date(2026, 2, 3))
    shifts_repo.add(1, date(2026, 2, 2), time(9, 0), time(18, 0))
    shifts_repo.add(1, date(2026, 2, 3), time(9, 0), time(18, 0))
    for day in (2, 3):
        punches_repo.add(1, PunchType.CLOCK_IN, datetime(2026, 2, day, 9, 30))
        punches_repo.add(1, PunchType.CLOCK_OUT, datetime(2026, 2, day, 18, 0))

    rows = svc.rows(svc.records_for_range(1, date(2026, 2, 2), date(2026, 2, 3)))

    assert [r["status_label"] for r in rows] == ["遅刻", "遅刻あり"]
