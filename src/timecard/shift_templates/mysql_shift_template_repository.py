from __future__ import annotations

import json
from typing import Optional, Sequence

from ..core.enums import ShiftType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import ALL_WEEKDAYS, ShiftTemplate
from .repository import ShiftTemplateRepository

_COLUMNS = "template_id, location_id, name, shift_type, start_time, end_time, description, applicable_days, is_active"


def _to_template(r: dict) -> ShiftTemplate:
    days = r.get("applicable_days")
    if isinstance(days, (bytes, bytearray)):
        days = days.decode("utf-8")
    if isinstance(days, str):
        days = json.loads(days)
    return ShiftTemplate(
        template_id=int(r["template_id"]),
        location_id=int(r["location_id"]),
        name=r["name"],
        shift_type=ShiftType(r["shift_type"]),
        start_time=normalize_mysql_time(r.get("start_time")),
        end_time=normalize_mysql_time(r.get("end_time")),
        description=r.get("description"),
        applicable_days=tuple(int(d) for d in days) if days else ALL_WEEKDAYS,
        is_active=bool(r["is_active"]),
    )


class MySQLShiftTemplateRepository(ShiftTemplateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, template_id: int) -> Optional[ShiftTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shift_templates WHERE template_id=%s", (int(template_id),))
            r = fetchone(cur)
            return _to_template(r) if r else None

    def get_by_location_and_name(self, *, location_id: int, name: str) -> Optional[ShiftTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM shift_templates WHERE location_id=%s AND name=%s",
                (int(location_id), name),
            )
            r = fetchone(cur)
            return _to_template(r) if r else None

    def list_for_location(self, location_id: int) -> Sequence[ShiftTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shift_templates
                WHERE location_id=%s AND is_active=1
                ORDER BY shift_type, name
                """,
                (int(location_id),),
            )
            return [_to_template(r) for r in fetchall(cur)]

    def create(self, template: ShiftTemplate) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shift_templates(
                    location_id, name, shift_type, start_time, end_time, description, applicable_days, is_active
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    template.location_id,
                    template.name,
                    template.shift_type.value,
                    template.start_time,
                    template.end_time,
                    template.description,
                    json.dumps(list(template.applicable_days)),
                    int(template.is_active),
                ),
            )
            return int(cur.lastrowid)

    def deactivate(self, template_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE shift_templates SET is_active=0 WHERE template_id=%s", (int(template_id),))
            return cur.rowcount > 0
