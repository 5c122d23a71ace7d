from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Location
from .repository import LocationRepository

_COLUMNS = "location_id, name, code, address, is_active"


def _to_location(r: dict) -> Location:
    return Location(
        location_id=int(r["location_id"]),
        name=r["name"],
        code=r["code"],
        address=r.get("address"),
        is_active=bool(r["is_active"]),
    )


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, location_id: int) -> Optional[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM locations WHERE location_id=%s", (int(location_id),))
            r = fetchone(cur)
            return _to_location(r) if r else None

    def get_by_code(self, code: str) -> Optional[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM locations WHERE code=%s", (code,))
            r = fetchone(cur)
            return _to_location(r) if r else None

    def list_active(self) -> Sequence[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM locations WHERE is_active=1 ORDER BY location_id")
            return [_to_location(r) for r in fetchall(cur)]

    def create(self, *, name: str, code: str, address: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO locations(name, code, address, is_active) VALUES(%s,%s,%s,1)",
                (name, code, address),
            )
            return int(cur.lastrowid)

    def update(self, *, location_id: int, name: str, code: str, address: Optional[str] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE locations SET name=%s, code=%s, address=%s WHERE location_id=%s",
                (name, code, address, int(location_id)),
            )
            return cur.rowcount > 0

    def deactivate(self, location_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE locations SET is_active=0 WHERE location_id=%s", (int(location_id),))
            return cur.rowcount > 0

    def list_location_ids_for_user(self, user_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT location_id FROM user_locations WHERE user_id=%s ORDER BY location_id",
                (int(user_id),),
            )
            return [int(r["location_id"]) for r in fetchall(cur)]

    def replace_user_locations(self, *, user_id: int, location_ids: Sequence[int]) -> None:
        # One transaction: delete then insert.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM user_locations WHERE user_id=%s", (int(user_id),))
            if location_ids:
                cur.executemany(
                    "INSERT INTO user_locations(user_id, location_id) VALUES(%s,%s)",
                    [(int(user_id), int(x)) for x in location_ids],
                )
