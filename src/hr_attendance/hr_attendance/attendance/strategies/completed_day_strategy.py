from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.constants import SECONDS_PER_HOUR
from ...core.enums import AttendanceStatus
from .base import DerivationStrategy, StatusDecision


class CompletedDayStrategy(DerivationStrategy):
    """Both events present: hours are the full-precision difference."""

    def decide(self, *, check_in: Optional[datetime], check_out: Optional[datetime]) -> StatusDecision:
        seconds = (check_out - check_in).total_seconds()
        return StatusDecision(status=AttendanceStatus.PRESENT, work_hours=max(seconds, 0.0) / SECONDS_PER_HOUR)
