from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import now_local
from ..common.web import admin_required, body, current_role, current_user_id, date_arg, date_field, int_arg, json_errors, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _monthly(user_id: int):
        today = now_local().date()
        report = container.report_service.monthly(
            user_id=user_id,
            year=int_arg("year", today.year),
            month=int_arg("month", today.month),
        )
        return ok(rows=report.rows, summary=report.summary)

    @app.route("/api/attendance/daily", methods=["GET"], endpoint="api_attendance_daily")
    @login_required
    @json_errors
    def api_attendance_daily():
        work_date = date_arg("date", now_local().date())
        record = container.attendance_service.daily_record(current_user_id(), work_date)
        return ok(record=container.attendance_service.to_row(record))

    @app.route("/api/attendance/monthly", methods=["GET"], endpoint="api_attendance_monthly")
    @login_required
    @json_errors
    def api_attendance_monthly():
        return _monthly(current_user_id())

    @app.route("/api/admin/users/<int:user_id>/attendance/monthly", methods=["GET"], endpoint="api_admin_user_monthly")
    @admin_required
    @json_errors
    def api_admin_user_monthly(user_id: int):
        return _monthly(user_id)

    @app.route("/api/admin/attendance/overview", methods=["GET"], endpoint="api_admin_attendance_overview")
    @admin_required
    @json_errors
    def api_admin_attendance_overview():
        work_date = date_arg("date", now_local().date())
        return ok(date=work_date.strftime("%Y-%m-%d"), rows=container.report_service.daily_overview(work_date=work_date))

    @app.route("/api/admin/status-labels", methods=["GET"], endpoint="api_admin_status_labels")
    @admin_required
    @json_errors
    def api_admin_status_labels():
        work_date = date_arg("date", now_local().date())
        service = container.status_label_service
        return ok(labels=service.current(work_date), history=service.history())

    @app.route("/api/admin/status-labels", methods=["POST"], endpoint="api_admin_status_labels_save")
    @admin_required
    @json_errors
    def api_admin_status_labels_save():
        data = body()
        setting_id = container.status_label_service.save(
            current_role=current_role(),
            labels=data.get("labels"),
            applied_from=date_field(data, "applied_from"),
        )
        return ok(201, setting_id=setting_id)
