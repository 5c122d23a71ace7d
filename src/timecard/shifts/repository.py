from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import ShiftStatus, ShiftType
from .model import ShiftAssignment


class ShiftRepository(Protocol):
    def get_by_id(self, shift_id: int) -> Optional[ShiftAssignment]:
        raise NotImplementedError

    def get_for_user_and_date(self, *, user_id: int, shift_date: date) -> Optional[ShiftAssignment]:
        raise NotImplementedError

    def list_for_user_between(self, *, user_id: int, start: date, end: date) -> Sequence[ShiftAssignment]:
        raise NotImplementedError

    def list_range(self, *, start: date, end: date, user_id: Optional[int] = None) -> Sequence[ShiftAssignment]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        user_id: int,
        shift_date: date,
        shift_type: ShiftType,
        start_time: Optional[time],
        end_time: Optional[time],
        status: ShiftStatus,
        note: Optional[str] = None,
    ) -> int:
        """Create or update the assignment keyed by (user_id, shift_date).

        Returns shift_id.
        """

        raise NotImplementedError

    def set_status_range(self, *, start: date, end: date, status: ShiftStatus, user_id: Optional[int] = None) -> int:
        raise NotImplementedError

    def delete(self, *, shift_id: int) -> bool:
        raise NotImplementedError
