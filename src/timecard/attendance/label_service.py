from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Mapping, Optional, Sequence

from ..core.enums import Role, WorkStatus
from ..core.exceptions import AuthorizationError, ValidationError
from .label_repository import StatusLabelRepository
from .model import StatusLabels, StatusLabelSetting

logger = logging.getLogger(__name__)

_EDITABLE = {s.value for s in WorkStatus if s != WorkStatus.EMPTY}


def select_label_setting(settings: Sequence[StatusLabelSetting], work_date: date) -> Optional[StatusLabelSetting]:
    """Latest setting whose applied_from is on or before work_date."""

    candidates = [s for s in settings if s.applied_from <= work_date]
    return max(candidates, key=lambda s: s.applied_from) if candidates else None


class StatusLabelService:
    """Display labels per status, optionally edited by admins with an effective date.

    Saved settings are layered over the base labels from configuration.
    """

    def __init__(self, settings: StatusLabelRepository | None = None, base: StatusLabels | None = None):
        self._settings = settings
        self._base = base or StatusLabels()

    def _all(self) -> Sequence[StatusLabelSetting]:
        return self._settings.list_all() if self._settings is not None else ()

    def resolver(self) -> Callable[[date], StatusLabels]:
        """Load the settings once and resolve labels for any date."""

        settings = self._all()

        def resolve(work_date: date) -> StatusLabels:
            setting = select_label_setting(settings, work_date)
            return self._base.merged(setting.labels) if setting else self._base

        return resolve

    def labels_for(self, work_date: date) -> StatusLabels:
        return self.resolver()(work_date)

    def current(self, work_date: date) -> dict:
        labels = self.labels_for(work_date)
        return {s.value: labels.label_for(s) for s in WorkStatus if s != WorkStatus.EMPTY}

    def history(self) -> list[dict]:
        return [s.to_dict() for s in self._all()]

    def save(self, *, current_role: Role, labels: Mapping[str, str], applied_from: date) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only an admin can change status labels")
        if self._settings is None:
            raise ValidationError("Status labels cannot be edited in this deployment")
        if not isinstance(labels, Mapping) or not labels:
            raise ValidationError("labels must be a non-empty object")

        cleaned = {}
        for key, value in labels.items():
            status = str(key).upper()
            if status not in _EDITABLE:
                raise ValidationError(f"Unknown status: {key}")
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(f"Label for {status} must be a non-empty string")
            cleaned[status] = value.strip()

        setting_id = self._settings.save(labels=cleaned, applied_from=applied_from)
        logger.info("status labels saved setting_id=%s applied_from=%s keys=%s", setting_id, applied_from, sorted(cleaned))
        return setting_id
