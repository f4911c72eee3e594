from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateCheckIn
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

_RECORD_COLUMNS = "attendance_id, user_id, work_date, check_in_time, check_out_time, status, total_hours"


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        total_hours=r.get("total_hours"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date=%s
                """,
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_for_user(self, user_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s
                ORDER BY work_date DESC
                """,
                (user_id,),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(user_id, work_date, check_in_time, status)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (user_id, work_date, check_in_time, status.value),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateCheckIn("Already checked in today")
            raise

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        total_hours: Decimal,
        only_if_open: bool = True,
    ) -> bool:
        guard = " AND check_out_time IS NULL" if only_if_open else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE attendance_records
                SET check_out_time=%s, total_hours=%s
                WHERE attendance_id=%s{guard}
                """,
                (check_out_time, total_hours, int(attendance_id)),
            )
            return cur.rowcount > 0

    def list_since(self, *, start_date: date, user_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        clauses = ["work_date >= %s"]
        params: list[object] = [start_date]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE {" AND ".join(clauses)}
                ORDER BY work_date DESC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_report_rows(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceReportRow]:
        clauses: list[str] = []
        params: list[object] = []

        if start_date is not None:
            clauses.append("ar.work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("ar.work_date <= %s")
            params.append(end_date)
        if employee_id is not None:
            if employee_id.isdigit():
                # dropdowns send the user id; users without an employee ID are only reachable this way
                clauses.append("(u.employee_id=%s OR ar.user_id=%s)")
                params.extend([employee_id, int(employee_id)])
            else:
                clauses.append("u.employee_id=%s")
                params.append(employee_id)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    ar.attendance_id, ar.user_id,
                    u.name, u.email, u.employee_id,
                    ar.work_date, ar.check_in_time, ar.check_out_time, ar.status, ar.total_hours
                FROM attendance_records ar
                LEFT JOIN users u ON u.user_id = ar.user_id
                {where}
                ORDER BY ar.work_date DESC, ar.user_id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            return [
                AttendanceReportRow(
                    attendance_id=int(r["attendance_id"]),
                    user_id=int(r["user_id"]),
                    name=r.get("name"),
                    email=r.get("email"),
                    employee_id=r.get("employee_id"),
                    work_date=r["work_date"],
                    check_in_time=r["check_in_time"],
                    check_out_time=r.get("check_out_time"),
                    status=AttendanceStatus(r["status"]),
                    total_hours=r.get("total_hours"),
                )
                for r in rows
            ]
