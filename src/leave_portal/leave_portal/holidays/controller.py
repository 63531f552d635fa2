from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.web import admin_required, domain_errors, form_value, login_required, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.holiday_service

    def _change_json(change):
        return {
            "holiday_id": change.holiday_id,
            "recalculated": {
                "examined": change.report.examined,
                "updated": len(change.report.updated),
                "failed": [f"{kind.value}#{rid}" for kind, rid in change.report.failed],
            },
        }

    @app.route("/holidays", methods=["GET"], endpoint="list_holidays")
    @login_required
    @domain_errors
    def list_holidays():
        return jsonify(to_json(svc.list_holidays(month=request.args.get("month", ""))))

    @app.route("/holidays", methods=["POST"], endpoint="add_holiday")
    @admin_required
    @domain_errors
    def add_holiday():
        change = svc.add_holiday(
            current_role=g.role,
            holiday_date=form_value("date"),
            note=form_value("note"),
        )
        return jsonify(_change_json(change)), 201

    @app.route("/holidays/<int:holiday_id>/delete", methods=["POST"], endpoint="remove_holiday")
    @admin_required
    @domain_errors
    def remove_holiday(holiday_id: int):
        change = svc.remove_holiday(current_role=g.role, holiday_id=holiday_id)
        return jsonify(_change_json(change))
