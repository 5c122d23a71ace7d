from __future__ import annotations

from datetime import timedelta

from flask import Flask

from ..common.datetime_utils import now_local
from ..common.web import admin_required, body, current_role, current_user_id, date_arg, json_errors, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/daily-reports", methods=["POST"], endpoint="api_daily_reports_submit")
    @login_required
    @json_errors
    def api_daily_reports_submit():
        data = body()
        report_id = container.daily_report_service.submit(
            user_id=current_user_id(),
            sales_amount=data.get("sales_amount"),
            customer_count=data.get("customer_count"),
            items_sold=data.get("items_sold"),
            notes=data.get("notes"),
        )
        return ok(201, report_id=report_id)

    @app.route("/api/daily-reports", methods=["GET"], endpoint="api_daily_reports")
    @login_required
    @json_errors
    def api_daily_reports():
        end = date_arg("end", now_local().date())
        start = date_arg("start", end - timedelta(days=30))
        return ok(reports=container.daily_report_service.list_for_user(user_id=current_user_id(), start=start, end=end))

    @app.route("/api/admin/daily-reports/summary", methods=["GET"], endpoint="api_admin_daily_reports_summary")
    @admin_required
    @json_errors
    def api_admin_daily_reports_summary():
        end = date_arg("end", now_local().date())
        start = date_arg("start", end.replace(day=1))
        return ok(summary=container.daily_report_service.summary(current_role=current_role(), start=start, end=end))
