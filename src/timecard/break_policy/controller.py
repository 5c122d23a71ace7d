from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, body, current_role, date_field, int_field, json_errors, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/break-policies", methods=["GET"], endpoint="api_admin_break_policies")
    @admin_required
    @json_errors
    def api_admin_break_policies():
        return ok(
            policies=container.break_policy_service.list_active(),
            default=container.break_policy_service.default_policy(),
        )

    @app.route("/api/admin/break-policies", methods=["POST"], endpoint="api_admin_break_policies_save")
    @admin_required
    @json_errors
    def api_admin_break_policies_save():
        data = body()
        saved_id = container.break_policy_service.save(
            current_role=current_role(),
            name=data.get("name", ""),
            rules=data.get("rules") or [],
            location_id=int_field(data, "location_id"),
            applied_from=date_field(data, "applied_from", required=False),
            policy_id=int_field(data, "policy_id"),
        )
        return ok(201, policy_id=saved_id)

    @app.route("/api/admin/break-policies/<int:policy_id>", methods=["DELETE"], endpoint="api_admin_break_policies_delete")
    @admin_required
    @json_errors
    def api_admin_break_policies_delete(policy_id: int):
        container.break_policy_service.deactivate(current_role=current_role(), policy_id=policy_id)
        return ok()
