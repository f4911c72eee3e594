from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from .base import HoursCalculator

_MS_PER_HOUR = Decimal(3_600_000)
_TWO_PLACES = Decimal("0.01")


class StandardHoursCalculator(HoursCalculator):
    """Standard rule: (out - in) in hours, rounded to 2 decimals, not below 0."""

    def total_hours(self, check_in_time: datetime, check_out_time: datetime) -> Decimal:
        delta = check_out_time - check_in_time
        millis = Decimal(delta.days * 86_400_000 + delta.seconds * 1000 + delta.microseconds // 1000)
        hours = max(millis / _MS_PER_HOUR, Decimal(0))
        return hours.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
