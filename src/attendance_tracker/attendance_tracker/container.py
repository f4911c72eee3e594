from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.report_service import ReportService
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, make_clock
from .core.constants import DEFAULT_LATE_CUTOFF
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    report_service: ReportService
    dashboard_service: DashboardService


def wire_services(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    conn: Optional[DatabaseConnection] = None,
    clock: Clock | None = None,
    late_cutoff: time = DEFAULT_LATE_CUTOFF,
    allow_checkout_overwrite: bool = False,
) -> Container:
    clock = clock or make_clock()
    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        strategy_factory=AttendanceStrategyFactory(late_cutoff=late_cutoff),
        clock=clock,
        allow_checkout_overwrite=allow_checkout_overwrite,
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        attendance_service=attendance_service,
        report_service=ReportService(attendance_service),
        dashboard_service=DashboardService(attendance_repo, users_repo, clock=clock),
    )


def build_container(
    *,
    db_config: dict,
    timezone: Optional[str] = None,
    late_cutoff: time = DEFAULT_LATE_CUTOFF,
    allow_checkout_overwrite: bool = False,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_services(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        conn=conn,
        clock=make_clock(timezone),
        late_cutoff=late_cutoff,
        allow_checkout_overwrite=allow_checkout_overwrite,
    )
