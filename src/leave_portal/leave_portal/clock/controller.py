from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, domain_errors, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    clock = container.clock

    @app.route("/clock", methods=["GET"], endpoint="clock_now")
    @login_required
    @domain_errors
    def clock_now():
        if not clock.is_synced:
            return jsonify({"synced": False}), 503
        return jsonify(
            {
                "synced": True,
                "now": clock.now().isoformat(),
                "offset_seconds": clock.offset.total_seconds(),
            }
        )

    @app.route("/admin/clock/sync", methods=["POST"], endpoint="clock_sync")
    @admin_required
    @domain_errors
    def clock_sync():
        # Body is the raw response of a time API (JSON or a bare ISO string).
        offset = clock.sync(request.get_data(as_text=True))
        return jsonify({"synced": True, "offset_seconds": offset.total_seconds()})
