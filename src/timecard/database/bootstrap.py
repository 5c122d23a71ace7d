from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' outside of quoted strings."""

    buf: list[str] = []
    quote: str | None = None
    escape = False

    for ch in _strip_comments(sql):
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    database = conn_factory.config.database
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path = SCHEMA_PATH) -> int:
    """Apply the idempotent schema script; returns the number of statements run."""

    ensure_database_exists(conn_factory)
    sql = Path(schema_path).read_text(encoding="utf-8")

    conn = conn_factory.connect()
    count = 0
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()

    logger.info("schema applied to %s (%d statements)", conn_factory.config.database, count)
    return count


DEMO_USERS = (
    ("U-demo-admin", "Demo Admin", "admin"),
    ("U-demo-staff", "Demo Staff", "staff"),
)


def ensure_demo_users(conn_factory: DatabaseConnection) -> int:
    """Insert (or refresh) the demo accounts; returns how many were written."""

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for line_user_id, display_name, role in DEMO_USERS:
            cur.execute(
                """
                INSERT INTO users (line_user_id, display_name, role, is_active)
                VALUES (%s, %s, %s, 1)
                ON DUPLICATE KEY UPDATE display_name=VALUES(display_name), role=VALUES(role), is_active=1
                """,
                (line_user_id, display_name, role),
            )
        conn.commit()
    finally:
        conn.close()

    logger.info("demo users ready in %s (%d)", conn_factory.config.database, len(DEMO_USERS))
    return len(DEMO_USERS)
