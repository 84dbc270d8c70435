from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EmployeeIdentity:
    """Minimal identity from the employee directory, used for joins.

    Note: The directory is owned elsewhere; this core never writes it.
    """

    employee_id: int
    name: str
    email: str
    avatar_ref: Optional[str] = None
    employee_code: Optional[str] = None

    def matches(self, needle: str) -> bool:
        """Case-insensitive substring match on name, email or employee code.

        `needle` must already be case-folded; empty matches everything.
        """
        if not needle:
            return True
        fields = (self.name, self.email, self.employee_code or "")
        return any(needle in (f or "").casefold() for f in fields)
