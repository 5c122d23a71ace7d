from __future__ import annotations

from flask import Flask, request

from ..common.web import admin_required, current_user_id, json_errors, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/me", methods=["GET"], endpoint="api_me")
    @login_required
    @json_errors
    def api_me():
        return ok(user=container.user_service.get(current_user_id()))

    @app.route("/api/admin/users", methods=["GET"], endpoint="api_admin_users")
    @admin_required
    @json_errors
    def api_admin_users():
        line_user_id = request.args.get("line_user_id")
        if line_user_id is not None:
            return ok(users=[container.user_service.find_by_line_user_id(line_user_id)])
        return ok(users=container.user_service.list_active())
