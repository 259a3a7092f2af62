from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today
from ..common.http import csv_response, group_json, user_json
from ..container import Container
from ..users.guards import admin_required


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/drivers", endpoint="admin_drivers")
    @admin_required
    def admin_drivers(current_user):
        drivers = container.user_service.search_drivers(request.args.get("q", ""))
        return jsonify({"success": True, "drivers": [user_json(d) for d in drivers]})

    @app.route("/api/admin/drivers/<user_id>/records", endpoint="admin_driver_records")
    @admin_required
    def admin_driver_records(current_user, user_id: str):
        groups = container.report_service.history(user_id)
        return jsonify({"success": True, "groups": [group_json(g) for g in groups]})

    @app.route("/api/admin/export", endpoint="admin_export")
    @admin_required
    def admin_export(current_user):
        export = container.report_service.global_export(today=today())
        return csv_response(export)
