from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today
from ..common.formatting import format_currency
from ..common.http import csv_response, group_json, json_error, record_json, request_payload
from ..container import Container
from ..core.exceptions import ValidationError
from ..payroll.service import EntryForm
from ..users.guards import driver_required, login_required


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", endpoint="dashboard")
    @login_required
    def dashboard(current_user):
        summary = container.report_service.dashboard(current_user.user_id, today=today())
        return jsonify(
            {
                "success": True,
                "monthKey": summary.month_key,
                "totalEarnings": round(summary.total_earnings, 2),
                "displayTotalEarnings": format_currency(summary.total_earnings),
                "daysWorked": summary.days_worked,
                "dailyAverage": round(summary.daily_average, 2),
                "displayDailyAverage": format_currency(summary.daily_average),
            }
        )

    @app.route("/api/records/preview", methods=["POST"], endpoint="preview_record")
    @login_required
    def preview_record(current_user):
        try:
            value = container.entry_service.preview(EntryForm.from_mapping(request_payload()))
        except ValidationError as e:
            return json_error(str(e), 400)
        return jsonify({"success": True, "value": value, "displayValue": format_currency(value)})

    @app.route("/api/records", methods=["POST"], endpoint="create_records")
    @driver_required
    def create_records(current_user):
        try:
            photos = container.photo_service.encode_uploads(request.files.getlist("photos"))
            form = EntryForm.from_mapping(request_payload(), photos=photos)
            records = container.entry_service.save_entry(current_user.user_id, form)
        except ValidationError as e:
            return json_error(str(e), 400)

        return jsonify({"success": True, "records": [record_json(r) for r in records]}), 201

    @app.route("/api/records", methods=["GET"], endpoint="history")
    @login_required
    def history(current_user):
        groups = container.report_service.history(current_user.user_id)
        return jsonify({"success": True, "groups": [group_json(g) for g in groups]})

    @app.route("/api/records/<record_id>", methods=["DELETE"], endpoint="delete_record")
    @driver_required
    def delete_record(current_user, record_id: str):
        record = container.record_service.get_record(record_id)
        if record and record.user_id != current_user.user_id:
            return json_error("Registro não encontrado.", 404)

        container.record_service.delete_record(record_id)
        return jsonify({"success": True})

    @app.route("/api/records/export/<month_key>", endpoint="export_month")
    @driver_required
    def export_month(current_user, month_key: str):
        try:
            export = container.report_service.month_export(
                user_id=current_user.user_id,
                username=current_user.username,
                month_key=month_key,
            )
        except ValidationError as e:
            return json_error(str(e), 404)
        return csv_response(export)
