"""Authorization predicates.

The identity collaborator has already resolved who the actor is and which
employees they may see; these checks only read that pre-validated scope.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, Optional

from ..core.actor import Actor
from ..core.enums import Role
from ..core.exceptions import AuthorizationError


def require_hr_scope(actor: Optional[Actor]) -> FrozenSet[int]:
    """Return the actor's visible employee ids, or raise if the actor is not HR."""
    if actor is None or actor.role != Role.HR:
        raise AuthorizationError("HR role required")
    return frozenset(actor.visible_employee_ids)


def restrict_scope(actor: Optional[Actor], employee_ids: Optional[Iterable[int]] = None) -> FrozenSet[int]:
    """Narrow an HR actor's scope to `employee_ids`; every id must be visible."""
    scope = require_hr_scope(actor)
    if employee_ids is None:
        return scope

    requested = frozenset(int(i) for i in employee_ids)
    outside = requested - scope
    if outside:
        raise AuthorizationError(f"Employees outside your scope: {sorted(outside)}")
    return requested


def require_leave_writer(actor: Optional[Actor], employee_id: int) -> None:
    """HR may record leave for employees in scope; admins for anyone."""
    if actor is None or actor.role not in (Role.HR, Role.ADMIN):
        raise AuthorizationError("Only HR or admins may record leave")
    if actor.role == Role.HR:
        restrict_scope(actor, [employee_id])
