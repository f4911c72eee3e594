from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access control."""

    EMPLOYEE = "employee"
    MANAGER = "manager"


class AttendanceStatus(str, Enum):
    """Day status stored with each attendance record.

    Only PRESENT and LATE are ever produced by check-in. ABSENT and HALF_DAY
    exist for aggregation of records written by other means.
    """

    PRESENT = "Present"
    LATE = "Late"
    ABSENT = "Absent"
    HALF_DAY = "Half-day"
