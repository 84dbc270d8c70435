from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import EmployeeIdentity


class EmployeeDirectory(Protocol):
    """Read-only view of the external employee directory."""

    def get_by_id(self, employee_id: int) -> Optional[EmployeeIdentity]:
        raise NotImplementedError

    def list_by_ids(self, employee_ids: Iterable[int]) -> Sequence[EmployeeIdentity]:
        raise NotImplementedError

    def list_ids_managed_by(self, hr_id: int) -> Sequence[int]:
        """Employees an HR actor is responsible for (their visible scope)."""

        raise NotImplementedError
