from __future__ import annotations

from datetime import timedelta

from flask import Flask

from ..common.datetime_utils import now_local
from ..common.web import (
    admin_required,
    body,
    current_role,
    current_user_id,
    date_arg,
    date_field,
    int_arg,
    int_field,
    json_errors,
    login_required,
    ok,
    text_field,
    time_field,
)
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/shifts", methods=["GET"], endpoint="api_shifts")
    @login_required
    @json_errors
    def api_shifts():
        today = now_local().date()
        start = date_arg("start", today)
        end = date_arg("end", start + timedelta(days=30))
        user_id = int_arg("user_id")
        if current_role() != Role.ADMIN:
            user_id = current_user_id()
        return ok(shifts=container.shift_service.list_range(start=start, end=end, user_id=user_id))

    @app.route("/api/shifts", methods=["POST"], endpoint="api_shifts_save")
    @login_required
    @json_errors
    def api_shifts_save():
        data = body()
        shift_id = container.shift_service.assign(
            current_user_id=current_user_id(),
            current_role=current_role(),
            user_id=int_field(data, "user_id", current_user_id()),
            shift_date=date_field(data, "shift_date"),
            shift_type=text_field(data, "shift_type"),
            start_time=time_field(data, "start_time"),
            end_time=time_field(data, "end_time"),
            status=text_field(data, "status") or None,
            note=data.get("note"),
        )
        return ok(201, shift_id=shift_id)

    @app.route("/api/shifts/<int:shift_id>", methods=["DELETE"], endpoint="api_shifts_delete")
    @login_required
    @json_errors
    def api_shifts_delete(shift_id: int):
        container.shift_service.delete(current_user_id=current_user_id(), current_role=current_role(), shift_id=shift_id)
        return ok()

    @app.route("/api/admin/shifts/confirm", methods=["POST"], endpoint="api_admin_shifts_confirm")
    @admin_required
    @json_errors
    def api_admin_shifts_confirm():
        data = body()
        count = container.shift_service.confirm_range(
            current_role=current_role(),
            start=date_field(data, "start"),
            end=date_field(data, "end"),
            user_id=int_field(data, "user_id"),
        )
        return ok(confirmed=count)
