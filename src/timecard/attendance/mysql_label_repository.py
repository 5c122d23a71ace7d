from __future__ import annotations

import json
from datetime import date
from typing import Mapping, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .label_repository import StatusLabelRepository
from .model import StatusLabelSetting


def _to_setting(r: dict) -> StatusLabelSetting:
    raw = r.get("labels") or "{}"
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        raw = json.loads(raw)
    return StatusLabelSetting(setting_id=int(r["setting_id"]), labels=dict(raw), applied_from=r["applied_from"])


class MySQLStatusLabelRepository(StatusLabelRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[StatusLabelSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT setting_id, labels, applied_from FROM status_label_settings ORDER BY applied_from")
            return [_to_setting(r) for r in fetchall(cur)]

    def save(self, *, labels: Mapping[str, str], applied_from: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO status_label_settings(labels, applied_from)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE labels=VALUES(labels)
                """,
                (json.dumps(dict(labels), ensure_ascii=False), applied_from),
            )
            if cur.lastrowid:
                return int(cur.lastrowid)
            cur.execute("SELECT setting_id FROM status_label_settings WHERE applied_from=%s", (applied_from,))
            r = fetchone(cur)
            return int(r["setting_id"]) if r else 0
