from __future__ import annotations

from flask import Flask

from ..common.web import (
    admin_required,
    body,
    current_role,
    date_field,
    int_arg,
    int_field,
    int_list_field,
    json_errors,
    ok,
    text_field,
    time_field,
)
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/shift-templates", methods=["GET"], endpoint="api_admin_shift_templates")
    @admin_required
    @json_errors
    def api_admin_shift_templates():
        location_id = int_arg("location_id")
        if location_id is None:
            raise ValidationError("location_id is required")
        return ok(templates=container.shift_template_service.list_by_location(location_id))

    @app.route("/api/admin/shift-templates", methods=["POST"], endpoint="api_admin_shift_templates_create")
    @admin_required
    @json_errors
    def api_admin_shift_templates_create():
        data = body()
        location_id = int_field(data, "location_id")
        if location_id is None:
            raise ValidationError("location_id is required")
        days = int_list_field(data, "applicable_days") if "applicable_days" in data else None
        template_id = container.shift_template_service.create(
            current_role=current_role(),
            location_id=location_id,
            name=data.get("name", ""),
            shift_type=text_field(data, "shift_type"),
            start_time=time_field(data, "start_time"),
            end_time=time_field(data, "end_time"),
            description=data.get("description"),
            applicable_days=days,
        )
        return ok(201, template_id=template_id)

    @app.route("/api/admin/shift-templates/<int:template_id>", methods=["DELETE"], endpoint="api_admin_shift_templates_delete")
    @admin_required
    @json_errors
    def api_admin_shift_templates_delete(template_id: int):
        container.shift_template_service.deactivate(current_role=current_role(), template_id=template_id)
        return ok()

    @app.route("/api/admin/shift-templates/<int:template_id>/apply", methods=["POST"], endpoint="api_admin_shift_templates_apply")
    @admin_required
    @json_errors
    def api_admin_shift_templates_apply(template_id: int):
        data = body()
        override = data.get("override_existing", False)
        if not isinstance(override, bool):
            raise ValidationError("override_existing must be true or false")
        result = container.shift_template_service.apply(
            current_role=current_role(),
            template_id=template_id,
            user_ids=int_list_field(data, "user_ids"),
            start=date_field(data, "start"),
            end=date_field(data, "end"),
            override_existing=override,
        )
        return ok(**result.to_dict())
