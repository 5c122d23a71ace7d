from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import day_bounds, now_local
from ..common.validators import optional_text
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import PunchState, PunchType
from ..core.exceptions import NotFoundError, ValidationError
from ..locations.repository import LocationRepository
from ..locations.service import resolve_punch_location
from ..users.repository import UserRepository
from .model import PunchEvent
from .repository import PunchRepository
from .sessions import is_fresh, leading_clock_out, open_session

logger = logging.getLogger(__name__)

# Which punch types may follow the last punch of the current session.
_NEXT_TYPES: dict[Optional[PunchType], tuple[PunchType, ...]] = {
    None: (PunchType.CLOCK_IN,),
    PunchType.CLOCK_IN: (PunchType.BREAK_START, PunchType.CLOCK_OUT),
    PunchType.BREAK_START: (PunchType.BREAK_END,),
    PunchType.BREAK_END: (PunchType.BREAK_START, PunchType.CLOCK_OUT),
    PunchType.CLOCK_OUT: (PunchType.CLOCK_IN,),
}

_STATES: dict[Optional[PunchType], PunchState] = {
    None: PunchState.NOT_STARTED,
    PunchType.CLOCK_IN: PunchState.WORKING,
    PunchType.BREAK_START: PunchState.ON_BREAK,
    PunchType.BREAK_END: PunchState.WORKING,
    PunchType.CLOCK_OUT: PunchState.FINISHED,
}

PUNCH_LABELS = {
    PunchType.CLOCK_IN: "出勤",
    PunchType.CLOCK_OUT: "退勤",
    PunchType.BREAK_START: "休憩開始",
    PunchType.BREAK_END: "休憩終了",
}


def _last_type(punches: Sequence[PunchEvent]) -> Optional[PunchType]:
    return punches[-1].punch_type if punches else None


def allowed_next_types(punches: Sequence[PunchEvent]) -> tuple[PunchType, ...]:
    """Punch types that may be recorded after today's punches (oldest first)."""
    return _NEXT_TYPES[_last_type(punches)]


@dataclass(frozen=True)
class TodayState:
    state: PunchState
    next_type: PunchType
    can_clock_out: bool
    punches: list[PunchEvent] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "next_type": self.next_type.value,
            "can_clock_out": self.can_clock_out,
            "punches": [punch_to_dict(p) for p in self.punches],
        }


def punch_to_dict(p: PunchEvent) -> dict:
    return {
        "punch_id": p.punch_id,
        "punch_type": p.punch_type.value,
        "label": PUNCH_LABELS[p.punch_type],
        "recorded_at": p.recorded_at.strftime("%Y-%m-%d %H:%M:%S"),
        "location_id": p.location_id,
        "location_name": p.location_name,
        "note": p.note or "",
    }


class PunchService:
    """Use case: record punches and report where a user is in their day.

    A session opened by a clock-in on the previous day stays current until
    it is closed, so night-shift staff can clock out after midnight.
    """

    def __init__(self, punches: PunchRepository, users: UserRepository, locations: LocationRepository | None = None):
        self._punches = punches
        self._users = users
        self._locations = locations

    def _current_punches(self, user_id: int, now: datetime) -> list[PunchEvent]:
        """Today's punches, preceded by yesterday's session if it is still open."""

        today_start, today_end = day_bounds(now.date())
        recent = self._punches.list_for_user_between(
            user_id=user_id, start=today_start - timedelta(days=1), end=today_end
        )
        earlier = [p for p in recent if p.recorded_at < today_start]
        today = [p for p in recent if p.recorded_at >= today_start]

        carried = open_session(earlier)
        if carried and not is_fresh(carried, now):
            if leading_clock_out(today) is None:
                logger.warning(
                    "user %s left a session open since %s; starting a new day", user_id, carried[0].recorded_at
                )
            carried = []
        return carried + today

    def record(
        self,
        user_id: int,
        punch_type: PunchType | str,
        *,
        now: datetime | None = None,
        location_id: Optional[int] = None,
        location_name: Optional[str] = None,
        note: Optional[str] = None,
    ) -> int:
        now = now or now_local()
        try:
            punch_type = PunchType(punch_type)
        except ValueError:
            raise ValidationError(f"Unknown punch type: {punch_type}") from None

        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            raise NotFoundError("User not found")

        current = self._current_punches(user_id, now)
        allowed = allowed_next_types(current)
        if punch_type not in allowed:
            expected = ", ".join(t.value for t in allowed)
            raise ValidationError(f"Cannot record {punch_type.value} now (expected: {expected})")

        location_name = optional_text(location_name, "location_name")
        if self._locations is not None:
            location = resolve_punch_location(self._locations, user_id=user_id, location_id=location_id)
            if location is not None:
                location_name = location_name or location.name

        punch_id = self._punches.create(
            user_id=user_id,
            punch_type=punch_type,
            recorded_at=now,
            location_id=location_id,
            location_name=location_name,
            note=optional_text(note, "note"),
        )
        logger.info("punch recorded user_id=%s type=%s at=%s", user_id, punch_type.value, now.isoformat())
        return punch_id

    def today_state(self, user_id: int, *, now: datetime | None = None) -> TodayState:
        now = now or now_local()
        punches = self._current_punches(user_id, now)
        last = _last_type(punches)
        return TodayState(
            state=_STATES[last],
            next_type=_NEXT_TYPES[last][0],
            can_clock_out=PunchType.CLOCK_OUT in _NEXT_TYPES[last],
            punches=punches,
        )

    def history(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        return [punch_to_dict(p) for p in self._punches.get_recent_for_user(user_id, int(limit))]
