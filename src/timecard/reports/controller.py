from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import now_local
from ..common.web import admin_required, json_errors, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/kpi", methods=["GET"], endpoint="api_admin_kpi")
    @admin_required
    @json_errors
    def api_admin_kpi():
        return ok(kpi=container.kpi_service.summary(now=now_local()))
