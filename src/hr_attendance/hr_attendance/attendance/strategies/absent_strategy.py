from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import DerivationStrategy, StatusDecision


class AbsentStrategy(DerivationStrategy):
    """No check-in recorded."""

    def decide(self, *, check_in: Optional[datetime], check_out: Optional[datetime]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT)
