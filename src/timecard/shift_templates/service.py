from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, time, timedelta
from typing import Optional, Sequence

from ..common.validators import optional_text, require_non_empty
from ..core.enums import Role, ShiftStatus, ShiftType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..locations.repository import LocationRepository
from ..shifts.repository import ShiftRepository
from ..shifts.service import shift_window_times
from ..users.repository import UserRepository
from .model import ALL_WEEKDAYS, ShiftTemplate
from .repository import ShiftTemplateRepository

logger = logging.getLogger(__name__)

MAX_APPLY_DAYS = 62


@dataclass
class ApplyResult:
    created: int = 0
    updated: int = 0
    skipped: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"created": self.created, "updated": self.updated, "skipped": self.skipped}


def _weekdays(days: Optional[Sequence[int]]) -> tuple[int, ...]:
    if days is None:
        return ALL_WEEKDAYS
    try:
        values = sorted({int(d) for d in days})
    except (TypeError, ValueError):
        raise ValidationError("applicable_days must be weekday numbers 1-7") from None
    if not values or values[0] < 1 or values[-1] > 7:
        raise ValidationError("applicable_days must be weekday numbers 1-7")
    return tuple(values)


class ShiftTemplateService:
    """Use case: keep per-location shift patterns and stamp them onto the calendar.

    Applying a template writes `adjusting` shifts for each selected user on each
    matching weekday. Existing shifts are kept unless overriding is requested,
    and confirmed shifts are never overwritten.
    """

    def __init__(
        self,
        templates: ShiftTemplateRepository,
        shifts: ShiftRepository,
        locations: LocationRepository,
        users: UserRepository,
    ):
        self._templates = templates
        self._shifts = shifts
        self._locations = locations
        self._users = users

    def _require_admin(self, role: Role) -> None:
        if role != Role.ADMIN:
            raise AuthorizationError("Only an admin can manage shift templates")

    def _get_active(self, template_id: int) -> ShiftTemplate:
        template = self._templates.get_by_id(int(template_id))
        if not template or not template.is_active:
            raise NotFoundError("Shift template not found")
        return template

    def list_by_location(self, location_id: int) -> list[dict]:
        return [t.to_dict() for t in self._templates.list_for_location(int(location_id))]

    def create(
        self,
        *,
        current_role: Role,
        location_id: int,
        name: str,
        shift_type: ShiftType | str,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
        description: Optional[str] = None,
        applicable_days: Optional[Sequence[int]] = None,
    ) -> int:
        self._require_admin(current_role)

        location = self._locations.get_by_id(int(location_id))
        if not location or not location.is_active:
            raise NotFoundError("Location not found")

        name = require_non_empty(name, "name")
        if self._templates.get_by_location_and_name(location_id=location.location_id, name=name):
            raise ValidationError(f"A template named {name} already exists for this location")
        try:
            shift_type = ShiftType(shift_type)
        except ValueError as e:
            raise ValidationError(str(e)) from None
        start_time, end_time = shift_window_times(shift_type, start_time, end_time)

        template_id = self._templates.create(
            ShiftTemplate(
                template_id=None,
                location_id=location.location_id,
                name=name,
                shift_type=shift_type,
                start_time=start_time,
                end_time=end_time,
                description=optional_text(description, "description"),
                applicable_days=_weekdays(applicable_days),
            )
        )
        logger.info("shift template created template_id=%s location_id=%s name=%s", template_id, location_id, name)
        return template_id

    def deactivate(self, *, current_role: Role, template_id: int) -> None:
        self._require_admin(current_role)
        if not self._templates.deactivate(int(template_id)):
            raise NotFoundError("Shift template not found")
        logger.info("shift template deactivated template_id=%s", template_id)

    def apply(
        self,
        *,
        current_role: Role,
        template_id: int,
        user_ids: Sequence[int],
        start: date,
        end: date,
        override_existing: bool = False,
    ) -> ApplyResult:
        self._require_admin(current_role)
        template = self._get_active(template_id)

        if end < start:
            raise ValidationError("End date must not be before start date")
        if (end - start).days + 1 > MAX_APPLY_DAYS:
            raise ValidationError(f"A template can be applied to at most {MAX_APPLY_DAYS} days at once")
        ids = sorted({int(u) for u in user_ids})
        if not ids:
            raise ValidationError("Select at least one user")
        for user_id in ids:
            if not self._users.get_by_id(user_id):
                raise NotFoundError(f"User not found: {user_id}")

        result = ApplyResult()
        note = f"テンプレート適用: {template.name}"
        for user_id in ids:
            existing = {s.shift_date: s for s in self._shifts.list_for_user_between(user_id=user_id, start=start, end=end)}
            day = start
            while day <= end:
                if template.applies_on(day):
                    current = existing.get(day)
                    if current and current.status == ShiftStatus.CONFIRMED:
                        result.skipped.append({"user_id": user_id, "date": day.isoformat(), "reason": "confirmed"})
                    elif current and not override_existing:
                        result.skipped.append({"user_id": user_id, "date": day.isoformat(), "reason": "exists"})
                    else:
                        self._shifts.upsert(
                            user_id=user_id,
                            shift_date=day,
                            shift_type=template.shift_type,
                            start_time=template.start_time,
                            end_time=template.end_time,
                            status=ShiftStatus.ADJUSTING,
                            note=note,
                        )
                        if current:
                            result.updated += 1
                        else:
                            result.created += 1
                day += timedelta(days=1)

        logger.info(
            "shift template applied template_id=%s users=%s %s..%s created=%d updated=%d skipped=%d",
            template.template_id, ids, start, end, result.created, result.updated, len(result.skipped),
        )
        return result
