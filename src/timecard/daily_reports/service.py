from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import optional_text, require_non_negative
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .repository import DailyReportRepository

logger = logging.getLogger(__name__)


class DailyReportService:
    """Use case: submit and aggregate daily sales reports."""

    def __init__(self, reports: DailyReportRepository):
        self._reports = reports

    def submit(
        self,
        *,
        user_id: int,
        sales_amount,
        customer_count,
        items_sold,
        notes: Optional[str] = None,
        report_date: Optional[date] = None,
        checkout_time: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> int:
        now = now or now_local()
        report_id = self._reports.upsert(
            user_id=int(user_id),
            report_date=report_date or now.date(),
            sales_amount=require_non_negative(sales_amount, "sales_amount"),
            customer_count=require_non_negative(customer_count, "customer_count"),
            items_sold=require_non_negative(items_sold, "items_sold"),
            checkout_time=checkout_time or now,
            notes=optional_text(notes, "notes"),
        )
        logger.info("daily report saved report_id=%s user_id=%s", report_id, user_id)
        return report_id

    def list_for_user(self, *, user_id: int, start: date, end: date) -> list[dict]:
        if end < start:
            raise ValidationError("End date must not be before start date")
        return [r.to_dict() for r in self._reports.list_range(start=start, end=end, user_id=user_id)]

    def summary(self, *, current_role: Role, start: date, end: date) -> dict:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only an admin can view the sales summary")
        if end < start:
            raise ValidationError("End date must not be before start date")

        reports = self._reports.list_range(start=start, end=end)
        sales = sum(r.sales_amount for r in reports)
        customers = sum(r.customer_count for r in reports)
        items = sum(r.items_sold for r in reports)
        return {
            "start": start.strftime("%Y-%m-%d"),
            "end": end.strftime("%Y-%m-%d"),
            "report_count": len(reports),
            "sales_amount": sales,
            "customer_count": customers,
            "items_sold": items,
            "customer_unit_price": round(sales / customers) if customers else 0,
            "items_per_customer": round(items / customers, 2) if customers else 0.0,
        }
