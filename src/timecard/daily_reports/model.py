from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class DailyReport:
    """Domain entity: the sales figures a user submits when clocking out."""

    report_id: int
    user_id: int
    report_date: date
    sales_amount: int
    customer_count: int
    items_sold: int
    checkout_time: Optional[datetime] = None
    notes: Optional[str] = None

    @property
    def customer_unit_price(self) -> int:
        if self.customer_count <= 0:
            return 0
        return round(self.sales_amount / self.customer_count)

    @property
    def items_per_customer(self) -> float:
        if self.customer_count <= 0:
            return 0.0
        return round(self.items_sold / self.customer_count, 2)

    def to_dict(self) -> dict:
        return {
            "report_id": self.report_id,
            "user_id": self.user_id,
            "report_date": self.report_date.strftime("%Y-%m-%d"),
            "sales_amount": self.sales_amount,
            "customer_count": self.customer_count,
            "items_sold": self.items_sold,
            "customer_unit_price": self.customer_unit_price,
            "items_per_customer": self.items_per_customer,
            "checkout_time": self.checkout_time.strftime("%H:%M") if self.checkout_time else None,
            "notes": self.notes or "",
        }
