from __future__ import annotations

from flask import Flask

from ..common.web import body, current_user_id, int_arg, int_field, json_errors, login_required, ok, text_field
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/punches", methods=["POST"], endpoint="api_punch")
    @login_required
    @json_errors
    def api_punch():
        data = body()
        punch_id = container.punch_service.record(
            current_user_id(),
            text_field(data, "punch_type"),
            location_id=int_field(data, "location_id"),
            location_name=data.get("location_name"),
            note=data.get("note"),
        )
        return ok(201, punch_id=punch_id)

    @app.route("/api/punches/today", methods=["GET"], endpoint="api_punches_today")
    @login_required
    @json_errors
    def api_punches_today():
        return ok(**container.punch_service.today_state(current_user_id()).to_dict())

    @app.route("/api/punches/history", methods=["GET"], endpoint="api_punches_history")
    @login_required
    @json_errors
    def api_punches_history():
        limit = int_arg("limit", 20)
        return ok(punches=container.punch_service.history(current_user_id(), limit=min(max(limit, 1), 200)))
