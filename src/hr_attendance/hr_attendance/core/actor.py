from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet

from .enums import Role


@dataclass(frozen=True)
class Actor:
    """Caller of a core operation, as supplied by the identity collaborator.

    `visible_employee_ids` is the pre-validated scope; the core trusts it.
    """

    actor_id: int
    role: Role
    visible_employee_ids: FrozenSet[int] = field(default_factory=frozenset)

    @property
    def is_hr(self) -> bool:
        return self.role == Role.HR
