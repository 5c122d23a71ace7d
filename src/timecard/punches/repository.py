from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PunchType
from .model import PunchEvent


class PunchRepository(Protocol):
    def create(
        self,
        *,
        user_id: int,
        punch_type: PunchType,
        recorded_at: datetime,
        location_id: Optional[int] = None,
        location_name: Optional[str] = None,
        note: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def list_for_user_between(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        """Punches with start <= recorded_at < end, oldest first."""

        raise NotImplementedError

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[PunchEvent]:
        raise NotImplementedError

    def list_between(self, *, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        """Every user's punches with start <= recorded_at < end, oldest first."""

        raise NotImplementedError
