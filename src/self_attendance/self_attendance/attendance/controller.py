from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request

from ..common.datetime_utils import YearMonth, now_local, parse_iso_date
from ..core.constants import CSV_FILENAME
from ..core.exceptions import LedgerIntegrityError, ValidationError
from ..container import Container
from ..users.controller import session_identity

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            identity = session_identity(container)
            if identity is None:
                return jsonify({"success": False, "message": "Please sign in to continue"}), 401
            context = container.session_service.restore(identity)
            return view(context, *args, **kwargs)

        return wrapper

    def _month_arg(default: YearMonth) -> YearMonth:
        value = request.args.get("month")
        return YearMonth.parse(value) if value else default

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(LedgerIntegrityError)
    def handle_integrity_error(e: LedgerIntegrityError):
        logger.error("Ledger integrity violation: %s", e)
        return jsonify({"success": False, "message": str(e)}), 409

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_summary")
    @login_required
    def attendance_summary(context):
        now = now_local()
        date_s = request.args.get("date")
        selected = parse_iso_date(date_s) if date_s else now.date()

        summary = container.attendance_service.summary(
            context,
            year_month=_month_arg(YearMonth.of(selected)),
            selected=selected,
            now=now,
        )
        return jsonify(
            {
                "success": True,
                "history": summary.history,
                "total_days_present": summary.total_days_present,
                "month": summary.month,
                "month_title": summary.month_title,
                "month_records": summary.month_records,
                "selected_date": summary.selected_date,
                "is_marked": summary.is_marked,
                "is_selectable": summary.is_selectable,
            }
        )

    @app.route("/api/attendance/toggle", methods=["POST"], endpoint="attendance_toggle")
    @login_required
    def attendance_toggle(context):
        data = request.get_json(silent=True) or request.form
        day = parse_iso_date(data.get("date") or "")

        try:
            outcome = container.attendance_service.toggle(context, day)
        except Exception:
            logger.exception("Toggle failed for %s", context.identity.user_id)
            return jsonify({"success": False, "message": "Could not save attendance"}), 500

        return jsonify(
            {
                "success": True,
                "result": outcome.result.value,
                "is_marked": outcome.is_marked,
            }
        )

    @app.route("/api/attendance/chart", methods=["GET"], endpoint="attendance_chart")
    @login_required
    def attendance_chart(context):
        year_month = _month_arg(YearMonth.of(now_local()))
        chart = container.attendance_service.chart(context, year_month)
        payload = chart.to_dict()
        payload["title"] = f"{year_month.title} Attendance Analytics"
        return jsonify(payload)

    @app.route("/attendance.csv", methods=["GET"], endpoint="attendance_csv")
    @login_required
    def attendance_csv(context):
        csv_text = container.attendance_service.export_csv(context)
        return app.response_class(
            csv_text.encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={CSV_FILENAME}"},
        )
