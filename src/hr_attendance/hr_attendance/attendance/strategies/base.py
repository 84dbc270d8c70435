from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    work_hours: Optional[float] = None


class DerivationStrategy(ABC):
    """Strategy Pattern: encapsulate how a day's status and hours are derived."""

    @abstractmethod
    def decide(self, *, check_in: Optional[datetime], check_out: Optional[datetime]) -> StatusDecision:
        raise NotImplementedError
