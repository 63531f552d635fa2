from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.web import admin_required, domain_errors, form_value, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.user_service

    @app.route("/admin/users", methods=["GET"], endpoint="admin_users")
    @admin_required
    @domain_errors
    def admin_users():
        return jsonify(to_json(svc.list_employees(current_role=g.role)))

    @app.route("/admin/users/<int:user_id>/quotas", methods=["POST"], endpoint="admin_user_quotas")
    @admin_required
    @domain_errors
    def admin_user_quotas(user_id: int):
        employee = svc.update_quotas(
            current_role=g.role,
            user_id=user_id,
            quota_annual=form_value("quota_annual", "0"),
            quota_birthday=form_value("quota_birthday", "0"),
            quota_comp=form_value("quota_comp", "0"),
        )
        return jsonify(to_json(employee))
