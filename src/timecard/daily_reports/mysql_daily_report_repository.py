from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import DailyReport
from .repository import DailyReportRepository


class MySQLDailyReportRepository(DailyReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(
        self,
        *,
        user_id: int,
        report_date: date,
        sales_amount: int,
        customer_count: int,
        items_sold: int,
        checkout_time: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO daily_reports(user_id, report_date, sales_amount, customer_count, items_sold, checkout_time, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    sales_amount=VALUES(sales_amount),
                    customer_count=VALUES(customer_count),
                    items_sold=VALUES(items_sold),
                    checkout_time=VALUES(checkout_time),
                    notes=VALUES(notes)
                """,
                (int(user_id), report_date, sales_amount, customer_count, items_sold, checkout_time, notes),
            )
            if cur.lastrowid:
                return int(cur.lastrowid)
            cur.execute(
                "SELECT report_id FROM daily_reports WHERE user_id=%s AND report_date=%s",
                (int(user_id), report_date),
            )
            r = fetchone(cur)
            return int(r["report_id"]) if r else 0

    def list_range(self, *, start: date, end: date, user_id: Optional[int] = None) -> Sequence[DailyReport]:
        clauses = ["report_date BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT report_id, user_id, report_date, sales_amount, customer_count, items_sold, checkout_time, notes
                FROM daily_reports
                WHERE {" AND ".join(clauses)}
                ORDER BY report_date ASC, user_id ASC
                """,
                tuple(params),
            )
            return [
                DailyReport(
                    report_id=int(r["report_id"]),
                    user_id=int(r["user_id"]),
                    report_date=r["report_date"],
                    sales_amount=int(r["sales_amount"]),
                    customer_count=int(r["customer_count"]),
                    items_sold=int(r["items_sold"]),
                    checkout_time=r.get("checkout_time"),
                    notes=r.get("notes"),
                )
                for r in fetchall(cur)
            ]
