from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Location:
    """Domain entity: a shop or site where staff punch in."""

    location_id: int
    name: str
    code: str
    address: Optional[str] = None
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "location_id": self.location_id,
            "name": self.name,
            "code": self.code,
            "address": self.address or "",
            "is_active": self.is_active,
        }
