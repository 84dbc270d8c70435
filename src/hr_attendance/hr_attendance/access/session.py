"""Builds the explicit `Actor` from the host application's session.

The host app owns login; it stores `user_id`, `role` and optionally `timezone`
in the Flask session. Nothing below this module reads the session.
"""

from __future__ import annotations

from datetime import tzinfo
from functools import wraps
from typing import Optional

from flask import current_app, g, jsonify, session

from ..common.datetime_utils import get_zone
from ..common.http import error_response
from ..core.actor import Actor
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import Role
from ..core.exceptions import DomainError
from ..employees.repository import EmployeeDirectory


def actor_from_session(directory: EmployeeDirectory) -> Optional[Actor]:
    if "user_id" not in session:
        return None

    actor_id = int(session["user_id"])
    try:
        role = Role(str(session.get("role", Role.EMPLOYEE.value)).upper())
    except ValueError:
        role = Role.EMPLOYEE

    visible: frozenset[int] = frozenset()
    if role == Role.HR:
        visible = frozenset(directory.list_ids_managed_by(actor_id))
    return Actor(actor_id=actor_id, role=role, visible_employee_ids=visible)


def session_zone() -> tzinfo:
    """Employee's day boundary: session override, else the configured reference zone."""
    name = session.get("timezone") or current_app.config.get("TIMEZONE", DEFAULT_TIMEZONE)
    return get_zone(name)


def actor_required(directory: EmployeeDirectory):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                actor = actor_from_session(directory)
            except DomainError as e:
                return error_response(e)
            if actor is None:
                return jsonify({"success": False, "message": "Login required"}), 401
            g.actor = actor
            return view(*args, **kwargs)

        return wrapper

    return decorator
