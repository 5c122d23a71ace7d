from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import PunchType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import PunchEvent
from .repository import PunchRepository

_COLUMNS = "punch_id, user_id, punch_type, recorded_at, location_id, location_name, note"


def _to_punch(r: dict) -> PunchEvent:
    return PunchEvent(
        punch_id=int(r["punch_id"]),
        user_id=int(r["user_id"]),
        punch_type=PunchType(r["punch_type"]),
        recorded_at=r["recorded_at"],
        location_id=int(r["location_id"]) if r.get("location_id") is not None else None,
        location_name=r.get("location_name"),
        note=r.get("note"),
    )


class MySQLPunchRepository(PunchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        user_id: int,
        punch_type: PunchType,
        recorded_at: datetime,
        location_id: Optional[int] = None,
        location_name: Optional[str] = None,
        note: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO punches(user_id, punch_type, recorded_at, location_id, location_name, note)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), punch_type.value, recorded_at, location_id, location_name, note),
            )
            return int(cur.lastrowid)

    def list_for_user_between(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM punches
                WHERE user_id=%s AND recorded_at >= %s AND recorded_at < %s
                ORDER BY recorded_at ASC, punch_id ASC
                """,
                (int(user_id), start, end),
            )
            return [_to_punch(r) for r in fetchall(cur)]

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[PunchEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM punches
                WHERE user_id=%s
                ORDER BY recorded_at DESC, punch_id DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_to_punch(r) for r in fetchall(cur)]

    def list_between(self, *, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM punches
                WHERE recorded_at >= %s AND recorded_at < %s
                ORDER BY recorded_at ASC, punch_id ASC
                """,
                (start, end),
            )
            return [_to_punch(r) for r in fetchall(cur)]
