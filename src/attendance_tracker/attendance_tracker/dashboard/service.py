from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import Clock, first_of_month, now_local
from ..core.enums import AttendanceStatus, Role
from ..users.repository import UserRepository


class DashboardService:
    """Aggregates for the employee and manager dashboards."""

    def __init__(self, attendance: AttendanceRepository, users: UserRepository, *, clock: Clock | None = None):
        self._attendance = attendance
        self._users = users
        self._clock = clock or now_local

    def employee_summary(self, user_id: Optional[int], *, now: datetime | None = None) -> dict:
        """Month-to-date status counts and worked hours.

        ``user_id=None`` aggregates over every user. Half-day records count in
        no bucket but their hours are summed.
        """
        now = now or self._clock()
        records = self._attendance.list_since(start_date=first_of_month(now.date()), user_id=user_id)

        counts = {status: 0 for status in AttendanceStatus}
        total = Decimal(0)
        for r in records:
            counts[r.status] += 1
            total += Decimal(r.total_hours or 0)

        return {
            "present": counts[AttendanceStatus.PRESENT],
            "late": counts[AttendanceStatus.LATE],
            "absent": counts[AttendanceStatus.ABSENT],
            "totalHours": float(total.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)),
        }

    def manager_summary(self, *, now: datetime | None = None) -> dict:
        # presentCount is every record dated today, late or not
        today = (now or self._clock()).date()
        rows = self._attendance.get_report_rows(start_date=today, end_date=today)
        return {
            "totalEmployees": self._users.count_by_role(Role.EMPLOYEE),
            "presentCount": len(rows),
            "lateCount": sum(1 for r in rows if r.status == AttendanceStatus.LATE),
        }
