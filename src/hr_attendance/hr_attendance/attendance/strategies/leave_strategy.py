from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import DerivationStrategy, StatusDecision


class LeaveStrategy(DerivationStrategy):
    """Leave overlay wins; time fields are kept but ignored."""

    def decide(self, *, check_in: Optional[datetime], check_out: Optional[datetime]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_LEAVE)
