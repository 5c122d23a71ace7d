from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import DailyReport


class DailyReportRepository(Protocol):
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
        """One report per (user_id, report_date); a resubmission overwrites it."""

        raise NotImplementedError

    def list_range(self, *, start: date, end: date, user_id: Optional[int] = None) -> Sequence[DailyReport]:
        raise NotImplementedError
