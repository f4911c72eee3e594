from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import CSV_DATETIME_FORMAT, NOT_AVAILABLE
from .model import AttendanceReportRow, report_row_to_json
from .service import AttendanceService

CSV_COLUMNS = ["EmployeeID", "Name", "Email", "Date", "Status", "CheckIn", "CheckOut", "TotalHours"]


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    count: int


class ReportService:
    """Manager reports: filtered record listing and CSV export."""

    def __init__(self, attendance: AttendanceService):
        self._attendance = attendance

    def build_report(
        self,
        *,
        start_date: str | date | None = None,
        end_date: str | date | None = None,
        employee_id: Optional[str] = None,
    ) -> ReportData:
        rows = self._attendance.query_filtered(start_date=start_date, end_date=end_date, employee_id=employee_id)
        out = [report_row_to_json(r) for r in rows]
        return ReportData(rows=out, count=len(out))

    def export_csv(
        self,
        *,
        start_date: str | date | None = None,
        end_date: str | date | None = None,
        employee_id: Optional[str] = None,
    ) -> str:
        rows = self._attendance.query_filtered(start_date=start_date, end_date=end_date, employee_id=employee_id)

        out = io.StringIO()
        writer = csv.writer(out, lineterminator="\n")
        writer.writerow(CSV_COLUMNS)
        for r in rows:
            writer.writerow(_csv_row(r))
        return out.getvalue()


def _csv_row(r: AttendanceReportRow) -> list[str]:
    return [
        r.employee_id or NOT_AVAILABLE,
        r.name or "Unknown",
        r.email or "Unknown",
        r.work_date.strftime("%Y-%m-%d"),
        r.status.value,
        r.check_in_time.strftime(CSV_DATETIME_FORMAT),
        r.check_out_time.strftime(CSV_DATETIME_FORMAT) if r.check_out_time else NOT_AVAILABLE,
        str(r.total_hours) if r.total_hours is not None else "",
    ]
