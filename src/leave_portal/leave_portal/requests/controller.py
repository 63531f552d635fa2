from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.web import admin_required, domain_errors, form_value, login_required, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.request_service

    @app.route("/requests", methods=["GET"], endpoint="my_requests")
    @login_required
    @domain_errors
    def my_requests():
        return jsonify(to_json(svc.list_my_requests(user_id=g.user_id)))

    @app.route("/requests/leaves", methods=["POST"], endpoint="new_leave")
    @login_required
    @domain_errors
    def new_leave():
        request_id = svc.create_leave(
            current_role=g.role,
            user_id=g.user_id,
            leave_type=form_value("leave_type"),
            start=form_value("start"),
            end=form_value("end"),
            reason=form_value("reason"),
        )
        return jsonify({"request_id": request_id}), 201

    @app.route("/requests/leaves/preview", methods=["POST"], endpoint="preview_leave")
    @login_required
    @domain_errors
    def preview_leave():
        start, end = form_value("start"), form_value("end")
        hours = svc.preview_leave_hours(start=start, end=end)
        out = {"hours": hours}
        leave_type = form_value("leave_type")
        if leave_type:
            balance = svc.quota_balance(user_id=g.user_id, leave_type=leave_type)
            if balance is not None:
                out["remaining"] = balance.remaining
                out["within_quota"] = hours <= balance.remaining
        return jsonify(out)

    @app.route("/requests/leaves/<int:request_id>/cancel", methods=["POST"], endpoint="cancel_leave")
    @login_required
    @domain_errors
    def cancel_leave(request_id: int):
        svc.cancel_leave(user_id=g.user_id, request_id=request_id)
        return jsonify({"ok": True})

    @app.route("/requests/overtimes", methods=["POST"], endpoint="new_overtime")
    @login_required
    @domain_errors
    def new_overtime():
        request_id = svc.create_overtime(
            current_role=g.role,
            user_id=g.user_id,
            start=form_value("start"),
            end=form_value("end"),
            reason=form_value("reason"),
        )
        return jsonify({"request_id": request_id}), 201

    @app.route("/requests/overtimes/<int:request_id>/cancel", methods=["POST"], endpoint="cancel_overtime")
    @login_required
    @domain_errors
    def cancel_overtime(request_id: int):
        svc.cancel_overtime(user_id=g.user_id, request_id=request_id)
        return jsonify({"ok": True})

    @app.route("/admin/requests", methods=["GET"], endpoint="admin_requests")
    @admin_required
    @domain_errors
    def admin_requests():
        return jsonify(to_json(svc.list_admin_pending()))

    @app.route("/admin/requests/leaves/<int:request_id>/<action>", methods=["POST"], endpoint="admin_decide_leave")
    @admin_required
    @domain_errors
    def admin_decide_leave(request_id: int, action: str):
        if action == "approve":
            svc.approve_leave(current_role=g.role, request_id=request_id)
        elif action == "reject":
            svc.reject_leave(current_role=g.role, request_id=request_id, reject_reason=form_value("reason"))
        elif action == "delete":
            svc.delete_leave(current_role=g.role, request_id=request_id)
        else:
            return jsonify({"error": "Unknown action"}), 404
        return jsonify({"ok": True})

    @app.route("/admin/requests/overtimes/<int:request_id>/<action>", methods=["POST"], endpoint="admin_decide_overtime")
    @admin_required
    @domain_errors
    def admin_decide_overtime(request_id: int, action: str):
        if action == "approve":
            svc.approve_overtime(current_role=g.role, request_id=request_id)
        elif action == "reject":
            svc.reject_overtime(current_role=g.role, request_id=request_id, reject_reason=form_value("reason"))
        elif action == "delete":
            svc.delete_overtime(current_role=g.role, request_id=request_id)
        elif action == "correct":
            hours = svc.correct_overtime(
                current_role=g.role,
                request_id=request_id,
                start=form_value("start"),
                end=form_value("end"),
                admin_note=form_value("admin_note"),
            )
            return jsonify({"ok": True, "hours": hours})
        else:
            return jsonify({"error": "Unknown action"}), 404
        return jsonify({"ok": True})
