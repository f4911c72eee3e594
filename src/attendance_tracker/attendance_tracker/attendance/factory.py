from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time

from ..core.constants import DEFAULT_LATE_CUTOFF
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    Late means strictly after the cutoff at minute resolution: with a 09:30
    cutoff, 09:30:59 is still on time and 09:31:00 is late.
    """

    late_cutoff: time = field(default=DEFAULT_LATE_CUTOFF)

    def is_late(self, now: datetime) -> bool:
        return (now.hour, now.minute) > (self.late_cutoff.hour, self.late_cutoff.minute)

    def for_checkin(self, *, now: datetime) -> AttendanceStrategy:
        if self.is_late(now):
            return LateStrategy()
        return NormalStrategy()

    def for_checkout(self, *, now: datetime) -> AttendanceStrategy:
        return NormalStrategy()
