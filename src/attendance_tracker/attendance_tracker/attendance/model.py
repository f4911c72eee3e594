from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in/check-out cycle of one user on one day."""

    attendance_id: int
    user_id: int
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    total_hours: Optional[Decimal] = None

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read model for reports/exports: a record joined with its owner."""

    attendance_id: int
    user_id: int
    name: Optional[str]
    email: Optional[str]
    employee_id: Optional[str]
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    total_hours: Optional[Decimal] = None


def record_to_json(r: AttendanceRecord) -> dict:
    return {
        "id": r.attendance_id,
        "userId": r.user_id,
        "date": r.work_date.strftime("%Y-%m-%d"),
        "checkInTime": r.check_in_time.isoformat(),
        "checkOutTime": r.check_out_time.isoformat() if r.check_out_time else None,
        "status": r.status.value,
        "totalHours": str(r.total_hours) if r.total_hours is not None else None,
    }


def report_row_to_json(r: AttendanceReportRow) -> dict:
    return {
        "id": r.attendance_id,
        "userId": r.user_id,
        "name": r.name,
        "email": r.email,
        "employeeId": r.employee_id,
        "date": r.work_date.strftime("%Y-%m-%d"),
        "checkInTime": r.check_in_time.isoformat(),
        "checkOutTime": r.check_out_time.isoformat() if r.check_out_time else None,
        "status": r.status.value,
        "totalHours": str(r.total_hours) if r.total_hours is not None else None,
    }
