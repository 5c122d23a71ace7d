from datetime import date, datetime

import pytest

from timecard.core.enums import Role
from timecard.core.exceptions import AuthorizationError, ValidationError
from timecard.daily_reports.service import DailyReportService


def test_submit_defaults_date_and_checkout(daily_reports_repo, fixed_now):
    svc = DailyReportService(daily_reports_repo)

    svc.submit(user_id=1, sales_amount="12000", customer_count=4, items_sold=10, notes=" busy ", now=fixed_now)

    rows = svc.list_for_user(user_id=1, start=date(2026, 2, 1), end=date(2026, 2, 28))
    assert rows == [
        {
            "report_id": 1,
            "user_id": 1,
            "report_date": "2026-02-02",
            "sales_amount": 12000,
            "customer_count": 4,
            "items_sold": 10,
            "customer_unit_price": 3000,
            "items_per_customer": 2.5,
            "checkout_time": "08:25",
            "notes": "busy",
        }
    ]


def test_submit_same_day_replaces_report(daily_reports_repo, fixed_now):
    svc = DailyReportService(daily_reports_repo)

    first = svc.submit(user_id=1, sales_amount=100, customer_count=1, items_sold=1, now=fixed_now)
    second = svc.submit(user_id=1, sales_amount=300, customer_count=2, items_sold=3, now=fixed_now)

    assert first == second
    assert len(daily_reports_repo.by_key) == 1


@pytest.mark.parametrize("field", ["sales_amount", "customer_count", "items_sold"])
def test_submit_rejects_negative_or_missing(daily_reports_repo, fixed_now, field):
    svc = DailyReportService(daily_reports_repo)
    values = {"sales_amount": 100, "customer_count": 1, "items_sold": 1}

    values[field] = -1
    with pytest.raises(ValidationError):
        svc.submit(user_id=1, now=fixed_now, **values)

    values[field] = None
    with pytest.raises(ValidationError):
        svc.submit(user_id=1, now=fixed_now, **values)


def test_summary_for_admin(daily_reports_repo):
    svc = DailyReportService(daily_reports_repo)
    svc.submit(user_id=1, sales_amount=10000, customer_count=3, items_sold=5, now=datetime(2026, 2, 2, 18, 0))
    svc.submit(user_id=2, sales_amount=5000, customer_count=2, items_sold=2, now=datetime(2026, 2, 3, 18, 0))
    svc.submit(user_id=1, sales_amount=999, customer_count=1, items_sold=1, now=datetime(2026, 3, 1, 18, 0))

    summary = svc.summary(current_role=Role.ADMIN, start=date(2026, 2, 1), end=date(2026, 2, 28))

    assert summary["report_count"] == 2
    assert summary["sales_amount"] == 15000
    assert summary["customer_unit_price"] == 3000
    assert summary["items_per_customer"] == 1.4


def test_summary_requires_admin(daily_reports_repo):
    with pytest.raises(AuthorizationError):
        DailyReportService(daily_reports_repo).summary(
            current_role=Role.STAFF, start=date(2026, 2, 1), end=date(2026, 2, 28)
        )


def test_empty_summary_has_zero_ratios(daily_reports_repo):
    summary = DailyReportService(daily_reports_repo).summary(
        current_role=Role.ADMIN, start=date(2026, 2, 1), end=date(2026, 2, 28)
    )

    assert summary["customer_unit_price"] == 0
    assert summary["items_per_customer"] == 0.0
