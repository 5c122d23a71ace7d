from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an employee linked to a LINE account."""

    user_id: int
    line_user_id: str
    display_name: str
    role: Role = Role.STAFF
    is_active: bool = True
