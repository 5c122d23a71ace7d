from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from ..core.constants import DEFAULT_BREAK_MINUTES, DEFAULT_BREAK_THRESHOLD_HOURS


@dataclass(frozen=True)
class BreakRule:
    """Assumed break for bound hours in [min_work_hours, max_work_hours).

    max_work_hours None means open-ended.
    """

    min_work_hours: float
    max_work_hours: Optional[float]
    break_minutes: int
    description: str = ""

    def contains(self, hours: float) -> bool:
        upper = math.inf if self.max_work_hours is None else self.max_work_hours
        return self.min_work_hours <= hours < upper

    def to_dict(self) -> dict:
        return {
            "min_work_hours": self.min_work_hours,
            "max_work_hours": self.max_work_hours,
            "break_minutes": self.break_minutes,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> "BreakRule":
        max_hours = raw.get("max_work_hours")
        return cls(
            min_work_hours=float(raw.get("min_work_hours") or 0),
            max_work_hours=float(max_hours) if max_hours not in (None, "") else None,
            break_minutes=int(raw.get("break_minutes") or 0),
            description=str(raw.get("description") or ""),
        )


@dataclass(frozen=True)
class BreakPolicy:
    """Rule set mapping bound hours to a break, independent of break punches."""

    name: str
    rules: tuple[BreakRule, ...] = field(default_factory=tuple)
    location_id: Optional[int] = None
    applied_from: Optional[date] = None
    is_active: bool = True
    policy_id: Optional[int] = None

    def sorted_rules(self) -> list[BreakRule]:
        return sorted(self.rules, key=lambda r: r.min_work_hours)

    def break_minutes_for(self, bound_minutes: int) -> int:
        if bound_minutes <= 0:
            return 0

        hours = bound_minutes / 60
        reached: Optional[BreakRule] = None
        for rule in self.sorted_rules():
            if rule.contains(hours):
                return rule.break_minutes
            if rule.min_work_hours <= hours:
                reached = rule
        # Longer than every rule: keep the break of the highest rule reached.
        return reached.break_minutes if reached else 0

    def applies_on(self, work_date: date) -> bool:
        return self.is_active and (self.applied_from is None or self.applied_from <= work_date)

    def to_dict(self) -> dict:
        return {
            "policy_id": self.policy_id,
            "location_id": self.location_id,
            "name": self.name,
            "rules": [r.to_dict() for r in self.sorted_rules()],
            "applied_from": self.applied_from.strftime("%Y-%m-%d") if self.applied_from else None,
            "is_active": self.is_active,
        }


DEFAULT_BREAK_POLICY = BreakPolicy(
    name="default",
    rules=(
        BreakRule(0, DEFAULT_BREAK_THRESHOLD_HOURS, 0, "no break under 6 hours"),
        BreakRule(DEFAULT_BREAK_THRESHOLD_HOURS, None, DEFAULT_BREAK_MINUTES, "1 hour break from 6 hours"),
    ),
)


def select_break_policy(
    policies: Iterable[BreakPolicy],
    *,
    work_date: date,
    location_id: Optional[int] = None,
) -> BreakPolicy:
    """Pick the policy in force for a date and location.

    A location-scoped policy beats the global one; among candidates the
    latest applied_from wins. Falls back to DEFAULT_BREAK_POLICY.
    """

    candidates = [p for p in policies if p.applies_on(work_date)]
    scoped = [p for p in candidates if location_id is not None and p.location_id == location_id]
    pool = scoped or [p for p in candidates if p.location_id is None]
    if not pool:
        return DEFAULT_BREAK_POLICY
    return max(pool, key=lambda p: (p.applied_from or date.min, p.policy_id or 0))
