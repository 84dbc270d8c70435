from __future__ import annotations

from flask import jsonify

from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    DomainError,
    InvalidRangeError,
    StateError,
    StoreUnavailableError,
    ValidationError,
)

# Most specific first: DuplicateCheckOutError is both a conflict and a state error.
_STATUS_BY_ERROR = (
    (ConflictError, 409),
    (StateError, 422),
    (ValidationError, 422),
    (InvalidRangeError, 400),
    (AuthorizationError, 403),
    (StoreUnavailableError, 503),
)


def error_response(e: DomainError):
    code = next((status for cls, status in _STATUS_BY_ERROR if isinstance(e, cls)), 400)
    return jsonify({"success": False, "error": type(e).__name__, "message": str(e)}), code


def parse_flag(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}
