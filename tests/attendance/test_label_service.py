from datetime import date

import pytest

from timecard.attendance.label_service import StatusLabelService, select_label_setting
from timecard.attendance.model import StatusLabels, StatusLabelSetting
from timecard.core.enums import Role, WorkStatus
from timecard.core.exceptions import AuthorizationError, ValidationError


def test_select_latest_setting_on_or_before_date():
    jan = StatusLabelSetting(labels={"LATE": "a"}, applied_from=date(2026, 1, 1))
    mar = StatusLabelSetting(labels={"LATE": "b"}, applied_from=date(2026, 3, 1))

    assert select_label_setting([mar, jan], date(2026, 2, 15)) is jan
    assert select_label_setting([mar, jan], date(2026, 3, 1)) is mar
    assert select_label_setting([mar, jan], date(2025, 12, 31)) is None


def test_saved_labels_layer_over_base(labels_repo):
    svc = StatusLabelService(labels_repo, base=StatusLabels.from_overrides({"absent": "休み"}))
    svc.save(current_role=Role.ADMIN, labels={"late": " 遅れ "}, applied_from=date(2026, 2, 1))

    before = svc.current(date(2026, 1, 31))
    after = svc.current(date(2026, 2, 1))

    assert before["LATE"] == "遅刻"
    assert after["LATE"] == "遅れ"
    assert after["ABSENT"] == "休み"
    assert after["NEEDS_REVIEW"] == "判定困難"
    assert "EMPTY" not in after
    assert svc.history() == [{"setting_id": 1, "labels": {"LATE": "遅れ"}, "applied_from": "2026-02-01"}]


def test_save_validates(labels_repo):
    svc = StatusLabelService(labels_repo)
    day = date(2026, 2, 1)

    with pytest.raises(AuthorizationError):
        svc.save(current_role=Role.STAFF, labels={"LATE": "x"}, applied_from=day)
    with pytest.raises(ValidationError):
        svc.save(current_role=Role.ADMIN, labels={}, applied_from=day)
    with pytest.raises(ValidationError):
        svc.save(current_role=Role.ADMIN, labels={"EMPTY": "x"}, applied_from=day)
    with pytest.raises(ValidationError):
        svc.save(current_role=Role.ADMIN, labels={"LATE": " "}, applied_from=day)
    with pytest.raises(ValidationError):
        svc.save(current_role=Role.ADMIN, labels=["LATE"], applied_from=day)


def test_without_storage_labels_are_read_only():
    svc = StatusLabelService()

    assert svc.labels_for(date(2026, 2, 1)).label_for(WorkStatus.NEEDS_REVIEW) == "判定困難"
    with pytest.raises(ValidationError):
        svc.save(current_role=Role.ADMIN, labels={"LATE": "x"}, applied_from=date(2026, 2, 1))
