from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import DerivationStrategy
from .strategies.completed_day_strategy import CompletedDayStrategy
from .strategies.leave_strategy import LeaveStrategy
from .strategies.open_day_strategy import OpenDayStrategy


@dataclass
class DerivationStrategyFactory:
    """Factory Pattern: choose the derivation strategy for a day's raw events."""

    def for_day(
        self,
        *,
        check_in: Optional[datetime],
        check_out: Optional[datetime],
        on_leave: bool,
    ) -> DerivationStrategy:
        if on_leave:
            return LeaveStrategy()
        if check_in is None:
            return AbsentStrategy()
        if check_out is None:
            return OpenDayStrategy()
        return CompletedDayStrategy()
