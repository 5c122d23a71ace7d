from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, body, current_role, current_user_id, int_field, int_list_field, json_errors, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/locations", methods=["GET"], endpoint="api_locations")
    @login_required
    @json_errors
    def api_locations():
        return ok(locations=container.location_service.list_for_user(current_user_id()))

    @app.route("/api/admin/locations", methods=["GET"], endpoint="api_admin_locations")
    @admin_required
    @json_errors
    def api_admin_locations():
        return ok(locations=container.location_service.list_active())

    @app.route("/api/admin/locations", methods=["POST"], endpoint="api_admin_locations_save")
    @admin_required
    @json_errors
    def api_admin_locations_save():
        data = body()
        location_id = container.location_service.save(
            current_role=current_role(),
            name=data.get("name", ""),
            code=data.get("code", ""),
            address=data.get("address"),
            location_id=int_field(data, "location_id"),
        )
        return ok(201, location_id=location_id)

    @app.route("/api/admin/locations/<int:location_id>", methods=["DELETE"], endpoint="api_admin_locations_delete")
    @admin_required
    @json_errors
    def api_admin_locations_delete(location_id: int):
        container.location_service.deactivate(current_role=current_role(), location_id=location_id)
        return ok()

    @app.route("/api/admin/users/<int:user_id>/locations", methods=["PUT"], endpoint="api_admin_user_locations")
    @admin_required
    @json_errors
    def api_admin_user_locations(user_id: int):
        ids = container.location_service.assign_user(
            current_role=current_role(),
            user_id=user_id,
            location_ids=int_list_field(body(), "location_ids"),
        )
        return ok(location_ids=ids)
