from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Location


class LocationRepository(Protocol):
    def get_by_id(self, location_id: int) -> Optional[Location]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[Location]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Location]:
        raise NotImplementedError

    def create(self, *, name: str, code: str, address: Optional[str] = None) -> int:
        raise NotImplementedError

    def update(self, *, location_id: int, name: str, code: str, address: Optional[str] = None) -> bool:
        raise NotImplementedError

    def deactivate(self, location_id: int) -> bool:
        raise NotImplementedError

    def list_location_ids_for_user(self, user_id: int) -> Sequence[int]:
        """Locations a user is assigned to; empty means no restriction."""

        raise NotImplementedError

    def replace_user_locations(self, *, user_id: int, location_ids: Sequence[int]) -> None:
        raise NotImplementedError
