from __future__ import annotations

import json
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import BreakPolicy, BreakRule
from .repository import BreakPolicyRepository

_COLUMNS = "policy_id, location_id, name, rules, applied_from, is_active"


def _to_policy(r: dict) -> BreakPolicy:
    raw_rules = r.get("rules") or "[]"
    if isinstance(raw_rules, (bytes, bytearray)):
        raw_rules = raw_rules.decode("utf-8")
    if isinstance(raw_rules, str):
        raw_rules = json.loads(raw_rules)
    return BreakPolicy(
        policy_id=int(r["policy_id"]),
        location_id=int(r["location_id"]) if r.get("location_id") is not None else None,
        name=r["name"],
        rules=tuple(BreakRule.from_dict(x) for x in raw_rules),
        applied_from=r.get("applied_from"),
        is_active=bool(r["is_active"]),
    )


class MySQLBreakPolicyRepository(BreakPolicyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[BreakPolicy]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM break_policies
                WHERE is_active=1
                ORDER BY location_id IS NOT NULL, location_id, applied_from
                """
            )
            return [_to_policy(r) for r in fetchall(cur)]

    def get_by_id(self, policy_id: int) -> Optional[BreakPolicy]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM break_policies WHERE policy_id=%s", (int(policy_id),))
            r = fetchone(cur)
            return _to_policy(r) if r else None

    def save(self, policy: BreakPolicy) -> int:
        rules_json = json.dumps([r.to_dict() for r in policy.sorted_rules()], ensure_ascii=False)
        with db_cursor(self._conn_factory) as (_, cur):
            if policy.policy_id is None:
                cur.execute(
                    """
                    INSERT INTO break_policies(location_id, name, rules, applied_from, is_active)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (policy.location_id, policy.name, rules_json, policy.applied_from, int(policy.is_active)),
                )
                return int(cur.lastrowid)

            cur.execute(
                """
                UPDATE break_policies
                SET location_id=%s, name=%s, rules=%s, applied_from=%s, is_active=%s
                WHERE policy_id=%s
                """,
                (policy.location_id, policy.name, rules_json, policy.applied_from, int(policy.is_active), policy.policy_id),
            )
            return int(policy.policy_id)

    def deactivate(self, policy_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE break_policies SET is_active=0 WHERE policy_id=%s", (int(policy_id),))
            return cur.rowcount > 0
