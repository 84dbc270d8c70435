from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..access.session import actor_required, session_zone
from ..common.datetime_utils import now_utc, parse_iso_date
from ..common.http import error_response
from ..core.exceptions import DomainError
from ..container import Container
from .model import AttendanceRecord


def record_to_json(record: AttendanceRecord | None) -> dict | None:
    if record is None:
        return None
    return {
        "id": record.record_id,
        "employee_id": record.employee_id,
        "date": record.work_date.isoformat(),
        "check_in_time": record.check_in_time.isoformat() if record.check_in_time else None,
        "check_out_time": record.check_out_time.isoformat() if record.check_out_time else None,
        "work_hours": record.work_hours,
        "status": record.status.value,
    }


def register(app: Flask, container: Container) -> None:
    login_required = actor_required(container.employee_directory)

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        try:
            today = container.attendance_service.today(g.actor, now=now_utc(), tz=session_zone())
        except DomainError as e:
            return error_response(e)
        return jsonify(
            {
                "success": True,
                "date": today.work_date.isoformat(),
                "state": today.state.value,
                "record": record_to_json(today.record),
            }
        )

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @login_required
    def attendance_check_in():
        try:
            record = container.attendance_service.check_in(g.actor, now=now_utc(), tz=session_zone())
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "record": record_to_json(record)}), 201

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @login_required
    def attendance_check_out():
        try:
            record = container.attendance_service.check_out(g.actor, now=now_utc(), tz=session_zone())
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "record": record_to_json(record)})

    @app.route("/api/hr/attendance/close-day", methods=["POST"], endpoint="attendance_close_day")
    @login_required
    def attendance_close_day():
        data = request.get_json(silent=True) or {}
        try:
            work_date = parse_iso_date(data.get("date", ""))
            created = container.attendance_service.materialize_absences(g.actor, work_date)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "date": work_date.isoformat(), "created": created})
