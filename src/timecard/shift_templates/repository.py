from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ShiftTemplate


class ShiftTemplateRepository(Protocol):
    def get_by_id(self, template_id: int) -> Optional[ShiftTemplate]:
        raise NotImplementedError

    def get_by_location_and_name(self, *, location_id: int, name: str) -> Optional[ShiftTemplate]:
        raise NotImplementedError

    def list_for_location(self, location_id: int) -> Sequence[ShiftTemplate]:
        """Active templates of a location, ordered by shift type then name."""

        raise NotImplementedError

    def create(self, template: ShiftTemplate) -> int:
        raise NotImplementedError

    def deactivate(self, template_id: int) -> bool:
        raise NotImplementedError
