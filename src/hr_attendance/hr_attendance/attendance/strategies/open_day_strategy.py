from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import DerivationStrategy, StatusDecision


class OpenDayStrategy(DerivationStrategy):
    """Checked in, not yet checked out."""

    def decide(self, *, check_in: Optional[datetime], check_out: Optional[datetime]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
