from __future__ import annotations

import logging
from datetime import date, time
from typing import Optional

from ..common.validators import optional_text
from ..core.enums import Role, ShiftStatus, ShiftType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import ShiftAssignment
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


def shift_to_dict(s: ShiftAssignment) -> dict:
    return {
        "shift_id": s.shift_id,
        "user_id": s.user_id,
        "shift_date": s.shift_date.strftime("%Y-%m-%d"),
        "shift_type": s.shift_type.value,
        "start_time": s.start_time.strftime("%H:%M") if s.start_time else None,
        "end_time": s.end_time.strftime("%H:%M") if s.end_time else None,
        "status": s.status.value,
        "note": s.note or "",
    }


def shift_window_times(
    shift_type: ShiftType, start_time: Optional[time], end_time: Optional[time]
) -> tuple[Optional[time], Optional[time]]:
    """Times to store for a shift type: none for `off`, both (and distinct) otherwise."""

    if shift_type == ShiftType.OFF:
        return None, None
    if start_time is None or end_time is None:
        raise ValidationError("Start and end time are required for a working shift")
    if start_time == end_time:
        raise ValidationError("Shift start and end must differ")
    return start_time, end_time


class ShiftService:
    """Use case: maintain the shift calendar (one assignment per user per date).

    Staff edit their own shifts while they are still being adjusted; admins can
    edit anyone's shift and confirm them.
    """

    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def _check_can_edit(self, *, current_user_id: int, current_role: Role, user_id: int, existing: Optional[ShiftAssignment]) -> None:
        if current_role == Role.ADMIN:
            return
        if int(current_user_id) != int(user_id):
            raise AuthorizationError("You can only edit your own shifts")
        if existing and existing.status == ShiftStatus.CONFIRMED:
            raise AuthorizationError("Confirmed shifts can only be changed by an admin")

    def assign(
        self,
        *,
        current_user_id: int,
        current_role: Role,
        user_id: int,
        shift_date: date,
        shift_type: ShiftType | str,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
        status: ShiftStatus | str | None = None,
        note: Optional[str] = None,
    ) -> int:
        if int(user_id) <= 0:
            raise ValidationError("Invalid user")
        try:
            shift_type = ShiftType(shift_type)
            status = ShiftStatus(status) if status else ShiftStatus.ADJUSTING
        except ValueError as e:
            raise ValidationError(str(e)) from None

        existing = self._shifts.get_for_user_and_date(user_id=int(user_id), shift_date=shift_date)
        self._check_can_edit(current_user_id=current_user_id, current_role=current_role, user_id=user_id, existing=existing)
        if status == ShiftStatus.CONFIRMED and current_role != Role.ADMIN:
            raise AuthorizationError("Only an admin can confirm shifts")

        start_time, end_time = shift_window_times(shift_type, start_time, end_time)

        shift_id = self._shifts.upsert(
            user_id=int(user_id),
            shift_date=shift_date,
            shift_type=shift_type,
            start_time=start_time,
            end_time=end_time,
            status=status,
            note=optional_text(note, "note"),
        )
        logger.info(
            "shift saved shift_id=%s user_id=%s date=%s type=%s status=%s",
            shift_id, user_id, shift_date, shift_type.value, status.value,
        )
        return shift_id

    def confirm_range(self, *, current_role: Role, start: date, end: date, user_id: Optional[int] = None) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only an admin can confirm shifts")
        if end < start:
            raise ValidationError("End date must not be before start date")

        count = self._shifts.set_status_range(start=start, end=end, status=ShiftStatus.CONFIRMED, user_id=user_id)
        logger.info("confirmed %d shifts between %s and %s (user_id=%s)", count, start, end, user_id)
        return count

    def delete(self, *, current_user_id: int, current_role: Role, shift_id: int) -> None:
        existing = self._shifts.get_by_id(int(shift_id))
        if not existing:
            raise NotFoundError("Shift not found")
        self._check_can_edit(current_user_id=current_user_id, current_role=current_role, user_id=existing.user_id, existing=existing)

        if not self._shifts.delete(shift_id=int(shift_id)):
            raise ValidationError("Failed to delete shift")
        logger.info("shift deleted shift_id=%s", shift_id)

    def list_range(self, *, start: date, end: date, user_id: Optional[int] = None) -> list[dict]:
        if end < start:
            raise ValidationError("End date must not be before start date")
        return [shift_to_dict(s) for s in self._shifts.list_range(start=start, end=end, user_id=user_id)]
