from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..access.policy import require_leave_writer
from ..access.session import actor_required
from ..attendance.controller import record_to_json
from ..common.datetime_utils import parse_iso_date
from ..common.http import error_response
from ..core.exceptions import DomainError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = actor_required(container.employee_directory)

    @app.route("/api/leave/mark", methods=["POST"], endpoint="leave_mark")
    @login_required
    def leave_mark():
        """Called once a leave request is approved; marks each day ON_LEAVE."""
        data = request.get_json(silent=True) or {}
        try:
            try:
                employee_id = int(data["employee_id"])
            except (KeyError, TypeError, ValueError):
                raise ValidationError("employee_id is required")
            require_leave_writer(g.actor, employee_id)
            start = parse_iso_date(data.get("start_date", ""))
            end = parse_iso_date(data.get("end_date") or data.get("start_date", ""))
            records = container.leave_service.mark_leave_range(employee_id, start, end)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "records": [record_to_json(r) for r in records]})
