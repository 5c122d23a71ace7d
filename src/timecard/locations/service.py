from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import optional_text, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import Location
from .repository import LocationRepository

logger = logging.getLogger(__name__)


def resolve_punch_location(locations: LocationRepository, *, user_id: int, location_id: Optional[int]) -> Optional[Location]:
    """The active location a user may punch at, or None when none was given.

    Users with assigned locations may only punch at those.
    """

    if location_id is None:
        return None
    location = locations.get_by_id(int(location_id))
    if not location or not location.is_active:
        raise NotFoundError("Location not found")
    allowed = locations.list_location_ids_for_user(user_id)
    if allowed and location.location_id not in allowed:
        raise AuthorizationError("You are not assigned to this location")
    return location


class LocationService:
    """Use case: maintain locations and which users work at them."""

    def __init__(self, locations: LocationRepository, users: UserRepository):
        self._locations = locations
        self._users = users

    def list_active(self) -> list[dict]:
        return [loc.to_dict() for loc in self._locations.list_active()]

    def list_for_user(self, user_id: int) -> list[dict]:
        active = self._locations.list_active()
        allowed = set(self._locations.list_location_ids_for_user(user_id))
        if allowed:
            active = [loc for loc in active if loc.location_id in allowed]
        return [loc.to_dict() for loc in active]

    def save(
        self,
        *,
        current_role: Role,
        name: str,
        code: str,
        address: Optional[str] = None,
        location_id: Optional[int] = None,
    ) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only an admin can change locations")

        name = require_non_empty(name, "name")
        code = require_non_empty(code, "code")
        address = optional_text(address, "address")

        same_code = self._locations.get_by_code(code)
        if same_code and same_code.location_id != location_id:
            raise ValidationError(f"Location code already in use: {code}")

        if location_id is None:
            location_id = self._locations.create(name=name, code=code, address=address)
        elif not self._locations.update(location_id=int(location_id), name=name, code=code, address=address):
            raise NotFoundError("Location not found")

        logger.info("location saved location_id=%s code=%s", location_id, code)
        return int(location_id)

    def deactivate(self, *, current_role: Role, location_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only an admin can change locations")
        if not self._locations.deactivate(int(location_id)):
            raise NotFoundError("Location not found")
        logger.info("location deactivated location_id=%s", location_id)

    def assign_user(self, *, current_role: Role, user_id: int, location_ids: Sequence[int]) -> list[int]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only an admin can assign locations")
        if not self._users.get_by_id(int(user_id)):
            raise NotFoundError("User not found")

        ids = sorted({int(x) for x in location_ids})
        for location_id in ids:
            location = self._locations.get_by_id(location_id)
            if not location or not location.is_active:
                raise ValidationError(f"Unknown location: {location_id}")

        self._locations.replace_user_locations(user_id=int(user_id), location_ids=ids)
        logger.info("user locations set user_id=%s locations=%s", user_id, ids)
        return ids
