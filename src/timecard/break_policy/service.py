from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import DEFAULT_BREAK_POLICY, BreakPolicy, BreakRule, select_break_policy
from .repository import BreakPolicyRepository

logger = logging.getLogger(__name__)


def validate_rules(rules: Sequence[BreakRule]) -> None:
    if not rules:
        raise ValidationError("At least one break rule is required")

    ordered = sorted(rules, key=lambda r: r.min_work_hours)
    for rule in ordered:
        if rule.min_work_hours < 0 or rule.break_minutes < 0:
            raise ValidationError("Break rule values must not be negative")
        if rule.max_work_hours is not None and rule.max_work_hours <= rule.min_work_hours:
            raise ValidationError("max_work_hours must be greater than min_work_hours")

    for prev, nxt in zip(ordered, ordered[1:]):
        if prev.max_work_hours is None or prev.max_work_hours > nxt.min_work_hours:
            raise ValidationError(
                f"Break rules overlap: {prev.min_work_hours}-{prev.max_work_hours} and {nxt.min_work_hours}"
            )


class BreakPolicyService:
    """Use case: manage break policies and resolve the one in force."""

    def __init__(self, policies: BreakPolicyRepository):
        self._policies = policies

    def list_active(self) -> list[dict]:
        return [p.to_dict() for p in self._policies.list_active()]

    def resolve(self, *, work_date: date, location_id: Optional[int] = None) -> BreakPolicy:
        return select_break_policy(self._policies.list_active(), work_date=work_date, location_id=location_id)

    def save(
        self,
        *,
        current_role: Role,
        name: str,
        rules: Sequence[dict],
        location_id: Optional[int] = None,
        applied_from: Optional[date] = None,
        policy_id: Optional[int] = None,
    ) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only an admin can change break policies")

        name = require_non_empty(name, "name")
        try:
            parsed = tuple(BreakRule.from_dict(r) for r in rules or [])
        except (TypeError, ValueError, AttributeError):
            raise ValidationError("Break rules are malformed") from None
        validate_rules(parsed)

        if policy_id is not None and not self._policies.get_by_id(int(policy_id)):
            raise NotFoundError("Break policy not found")

        saved_id = self._policies.save(
            BreakPolicy(
                policy_id=int(policy_id) if policy_id is not None else None,
                location_id=location_id,
                name=name,
                rules=parsed,
                applied_from=applied_from,
            )
        )
        logger.info("break policy saved policy_id=%s location_id=%s rules=%d", saved_id, location_id, len(parsed))
        return saved_id

    def deactivate(self, *, current_role: Role, policy_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only an admin can change break policies")
        if not self._policies.deactivate(int(policy_id)):
            raise NotFoundError("Break policy not found")
        logger.info("break policy deactivated policy_id=%s", policy_id)

    @staticmethod
    def default_policy() -> dict:
        return DEFAULT_BREAK_POLICY.to_dict()
