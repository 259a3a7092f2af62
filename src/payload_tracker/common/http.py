from __future__ import annotations

import io
from typing import Mapping

from flask import jsonify, request, send_file

from ..database.schema_map import USERS, WORK_RECORDS, model_attrs
from .formatting import format_currency, format_date


def json_error(message: str, status: int = 400):
    return jsonify({"success": False, "message": message}), status


def request_payload() -> Mapping:
    """JSON body when sent, otherwise the submitted form."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else request.form


def user_json(user) -> dict:
    return USERS.to_json(model_attrs(user), exclude=("password_hash",))


def record_json(record, *, with_photos: bool = True) -> dict:
    out = WORK_RECORDS.to_json(model_attrs(record), exclude=() if with_photos else ("photos",))
    out["displayDate"] = format_date(record.work_date)
    out["displayValue"] = format_currency(record.value)
    return out


def group_json(group, *, with_photos: bool = True) -> dict:
    return {
        "monthKey": group.month_key,
        "label": group.label,
        "total": round(group.total, 2),
        "displayTotal": format_currency(group.total),
        "records": [record_json(r, with_photos=with_photos) for r in group.records],
    }


def csv_response(export):
    # utf-8-sig so Excel picks up the accents in month names and routes.
    return send_file(
        io.BytesIO(export.content.encode("utf-8-sig")),
        mimetype="text/csv",
        as_attachment=True,
        download_name=export.filename,
    )
