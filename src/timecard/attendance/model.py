from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Mapping, Optional

from ..core.enums import ShiftType, WorkStatus


@dataclass(frozen=True)
class DailyAttendanceRecord:
    """Read model: one user's attendance for one calendar day.

    Recomputed on demand from punches, the shift assignment and the break
    policy; never stored.
    """

    work_date: date
    status: WorkStatus = WorkStatus.EMPTY
    user_id: Optional[int] = None
    shift_type: Optional[ShiftType] = None
    shift_start: Optional[time] = None
    shift_end: Optional[time] = None
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    break_start: Optional[datetime] = None
    break_end: Optional[datetime] = None
    break_minutes: int = 0
    bound_minutes: int = 0
    actual_minutes: int = 0
    overtime_minutes: int = 0
    late_minutes: int = 0
    early_leave_minutes: int = 0


_DEFAULT_LABELS = {
    WorkStatus.EMPTY: "",
    WorkStatus.NORMAL: "通常勤務",
    WorkStatus.LATE: "遅刻",
    WorkStatus.EARLY_LEAVE: "早退",
    WorkStatus.ABSENT: "欠勤",
    WorkStatus.NEEDS_REVIEW: "判定困難",
}


@dataclass(frozen=True)
class StatusLabels:
    """Display label per work status; admins may rename them in settings."""

    labels: Mapping[WorkStatus, str] = field(default_factory=lambda: dict(_DEFAULT_LABELS))

    @classmethod
    def from_overrides(cls, overrides: Optional[Mapping[str, str]]) -> "StatusLabels":
        return cls().merged(overrides)

    def merged(self, overrides: Optional[Mapping[str, str]]) -> "StatusLabels":
        """Copy with the given labels replaced; unknown statuses are ignored."""

        labels = dict(self.labels)
        for key, value in (overrides or {}).items():
            try:
                labels[WorkStatus(str(key).upper())] = str(value)
            except ValueError:
                continue
        return StatusLabels(labels=labels)

    def label_for(self, status: WorkStatus) -> str:
        return self.labels.get(status, status.value)


@dataclass(frozen=True)
class StatusLabelSetting:
    """Admin-edited label overrides in force from applied_from on."""

    labels: Mapping[str, str]
    applied_from: date
    setting_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "setting_id": self.setting_id,
            "labels": dict(self.labels),
            "applied_from": self.applied_from.strftime("%Y-%m-%d"),
        }
