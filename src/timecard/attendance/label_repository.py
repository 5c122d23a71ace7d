from __future__ import annotations

from datetime import date
from typing import Mapping, Protocol, Sequence

from .model import StatusLabelSetting


class StatusLabelRepository(Protocol):
    def list_all(self) -> Sequence[StatusLabelSetting]:
        """Every saved setting, oldest applied_from first."""

        raise NotImplementedError

    def save(self, *, labels: Mapping[str, str], applied_from: date) -> int:
        """Insert, or replace the setting with the same applied_from."""

        raise NotImplementedError
