from __future__ import annotations

import csv
import io
from dataclasses import asdict
from datetime import date

from flask import Flask, g, jsonify, request

from ..access.session import actor_required, session_zone
from ..common.datetime_utils import month_range, now_utc, parse_iso_date, parse_month
from ..common.http import error_response, parse_flag
from ..core.exceptions import DomainError
from ..container import Container

CSV_FIELDS = ["date", "employee_id", "name", "email", "check_in", "check_out", "work_hours", "status", "materialized"]


def _requested_range(tz) -> tuple[date, date]:
    """`start`+`end`, or `month` (YYYY-MM), defaulting to the current month."""
    start_s = request.args.get("start")
    end_s = request.args.get("end")
    if start_s or end_s:
        return parse_iso_date(start_s or ""), parse_iso_date(end_s or "")

    month_s = request.args.get("month")
    if month_s:
        return month_range(*parse_month(month_s))

    today = now_utc().astimezone(tz).date()
    return month_range(today.year, today.month)


def register(app: Flask, container: Container) -> None:
    login_required = actor_required(container.employee_directory)

    def _run_query():
        tz = session_zone()
        start, end = _requested_range(tz)
        rows = container.query_service.query_attendance(
            g.actor,
            start,
            end,
            request.args.get("q", ""),
            fill_gaps=parse_flag(request.args.get("fill_gaps")),
        )
        return tz, start, end, rows

    @app.route("/api/hr/attendance", methods=["GET"], endpoint="hr_attendance")
    @login_required
    def hr_attendance():
        try:
            tz, start, end, rows = _run_query()
        except DomainError as e:
            return error_response(e)
        return jsonify(
            {
                "success": True,
                "start": start.isoformat(),
                "end": end.isoformat(),
                "records": [container.query_service.to_ui(r, tz=tz) for r in rows],
            }
        )

    @app.route("/api/hr/attendance/summary", methods=["GET"], endpoint="hr_attendance_summary")
    @login_required
    def hr_attendance_summary():
        try:
            _, start, end, rows = _run_query()
        except DomainError as e:
            return error_response(e)
        summary = container.query_service.summarize(rows)
        return jsonify(
            {
                "success": True,
                "start": start.isoformat(),
                "end": end.isoformat(),
                "summary": [
                    {**asdict(s), "total_work_hours": round(s.total_work_hours, 1)} for s in summary
                ],
            }
        )

    @app.route("/api/hr/attendance.csv", methods=["GET"], endpoint="hr_attendance_csv")
    @login_required
    def hr_attendance_csv():
        try:
            tz, start, end, rows = _run_query()
        except DomainError as e:
            return error_response(e)

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for r in rows:
            ui = container.query_service.to_ui(r, tz=tz)
            writer.writerow(
                {
                    "date": ui["date"],
                    "employee_id": ui["employee"]["id"],
                    "name": ui["employee"]["name"],
                    "email": ui["employee"]["email"],
                    "check_in": ui["check_in"],
                    "check_out": ui["check_out"],
                    "work_hours": ui["work_hours"],
                    "status": ui["status"],
                    "materialized": int(ui["materialized"]),
                }
            )

        filename = f"attendance_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
