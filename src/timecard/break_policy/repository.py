from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import BreakPolicy


class BreakPolicyRepository(Protocol):
    def list_active(self) -> Sequence[BreakPolicy]:
        """Global and per-location policies with is_active set."""

        raise NotImplementedError

    def get_by_id(self, policy_id: int) -> Optional[BreakPolicy]:
        raise NotImplementedError

    def save(self, policy: BreakPolicy) -> int:
        """Insert when policy_id is None, update otherwise. Returns policy_id."""

        raise NotImplementedError

    def deactivate(self, policy_id: int) -> bool:
        raise NotImplementedError
