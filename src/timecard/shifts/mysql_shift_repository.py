from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..core.enums import ShiftStatus, ShiftType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import ShiftAssignment
from .repository import ShiftRepository

_COLUMNS = "shift_id, user_id, shift_date, shift_type, start_time, end_time, status, note"


def _to_shift(r: dict) -> ShiftAssignment:
    return ShiftAssignment(
        shift_id=int(r["shift_id"]),
        user_id=int(r["user_id"]),
        shift_date=r["shift_date"],
        shift_type=ShiftType(r["shift_type"]),
        start_time=normalize_mysql_time(r.get("start_time")),
        end_time=normalize_mysql_time(r.get("end_time")),
        status=ShiftStatus(r["status"]),
        note=r.get("note"),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, shift_id: int) -> Optional[ShiftAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _to_shift(r) if r else None

    def get_for_user_and_date(self, *, user_id: int, shift_date: date) -> Optional[ShiftAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM shifts WHERE user_id=%s AND shift_date=%s",
                (int(user_id), shift_date),
            )
            r = fetchone(cur)
            return _to_shift(r) if r else None

    def list_for_user_between(self, *, user_id: int, start: date, end: date) -> Sequence[ShiftAssignment]:
        return self.list_range(start=start, end=end, user_id=user_id)

    def list_range(self, *, start: date, end: date, user_id: Optional[int] = None) -> Sequence[ShiftAssignment]:
        clauses = ["shift_date BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shifts
                WHERE {" AND ".join(clauses)}
                ORDER BY shift_date ASC, user_id ASC
                """,
                tuple(params),
            )
            return [_to_shift(r) for r in fetchall(cur)]

    def upsert(
        self,
        *,
        user_id: int,
        shift_date: date,
        shift_type: ShiftType,
        start_time: Optional[time],
        end_time: Optional[time],
        status: ShiftStatus,
        note: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(user_id, shift_date, shift_type, start_time, end_time, status, note)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    shift_type=VALUES(shift_type),
                    start_time=VALUES(start_time),
                    end_time=VALUES(end_time),
                    status=VALUES(status),
                    note=VALUES(note)
                """,
                (int(user_id), shift_date, shift_type.value, start_time, end_time, status.value, note),
            )

            # On update lastrowid can be 0; look the row up by its key.
            if cur.lastrowid:
                return int(cur.lastrowid)
            cur.execute("SELECT shift_id FROM shifts WHERE user_id=%s AND shift_date=%s", (int(user_id), shift_date))
            r = fetchone(cur)
            return int(r["shift_id"]) if r else 0

    def set_status_range(self, *, start: date, end: date, status: ShiftStatus, user_id: Optional[int] = None) -> int:
        sql = "UPDATE shifts SET status=%s WHERE shift_date BETWEEN %s AND %s AND status<>%s"
        params: list[object] = [status.value, start, end, status.value]
        if user_id is not None:
            sql += " AND user_id=%s"
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return int(cur.rowcount)

    def delete(self, *, shift_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shifts WHERE shift_id=%s", (int(shift_id),))
            return cur.rowcount > 0
