from __future__ import annotations

from ..core.exceptions import NotFoundError, ValidationError
from .model import User
from .repository import UserRepository


def user_to_dict(u: User) -> dict:
    return {
        "user_id": u.user_id,
        "line_user_id": u.line_user_id,
        "display_name": u.display_name,
        "role": u.role.value,
        "is_active": u.is_active,
    }


class UserService:
    def __init__(self, users: UserRepository):
        self._users = users

    def get(self, user_id: int) -> dict:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user_to_dict(user)

    def find_by_line_user_id(self, line_user_id: str) -> dict:
        if not line_user_id or not line_user_id.strip():
            raise ValidationError("line_user_id is required")
        user = self._users.get_by_line_user_id(line_user_id.strip())
        if not user:
            raise NotFoundError("User not found")
        return user_to_dict(user)

    def list_active(self) -> list[dict]:
        return [user_to_dict(u) for u in self._users.list_active()]
