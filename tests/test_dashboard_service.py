from __future__ import annotations

from datetime import datetime

from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus
from src.attendance_tracker.attendance_tracker.dashboard.service import DashboardService


def test_employee_summary_counts_current_month(attendance_repo, users_repo, employee, manager):
    add = attendance_repo.add
    add(user_id=employee.user_id, check_in_time=datetime(2024, 2, 28, 9, 0), status=AttendanceStatus.PRESENT, total_hours="8.00")
    add(user_id=employee.user_id, check_in_time=datetime(2024, 3, 1, 9, 0), status=AttendanceStatus.PRESENT, total_hours="8.25")
    add(user_id=employee.user_id, check_in_time=datetime(2024, 3, 4, 9, 40), status=AttendanceStatus.LATE, total_hours="7.50")
    add(user_id=employee.user_id, check_in_time=datetime(2024, 3, 5, 9, 0), status=AttendanceStatus.ABSENT)
    add(user_id=employee.user_id, check_in_time=datetime(2024, 3, 6, 9, 0), status=AttendanceStatus.HALF_DAY, total_hours="4.00")
    add(user_id=employee.user_id, check_in_time=datetime(2024, 3, 7, 9, 0), status=AttendanceStatus.PRESENT)
    add(user_id=manager.user_id, check_in_time=datetime(2024, 3, 4, 9, 0), status=AttendanceStatus.PRESENT, total_hours="9.00")

    svc = DashboardService(attendance_repo, users_repo)
    summary = svc.employee_summary(employee.user_id, now=datetime(2024, 3, 7, 12, 0))

    assert summary == {"present": 2, "late": 1, "absent": 1, "totalHours": 19.75}


def test_employee_summary_all_users(attendance_repo, users_repo, employee, manager):
    attendance_repo.add(user_id=employee.user_id, check_in_time=datetime(2024, 3, 4, 9, 0), status=AttendanceStatus.PRESENT, total_hours="1.10")
    attendance_repo.add(user_id=manager.user_id, check_in_time=datetime(2024, 3, 4, 9, 45), status=AttendanceStatus.LATE, total_hours="2.20")

    summary = DashboardService(attendance_repo, users_repo).employee_summary(None, now=datetime(2024, 3, 31, 23, 0))

    assert summary == {"present": 1, "late": 1, "absent": 0, "totalHours": 3.3}


def test_employee_summary_empty_month(attendance_repo, users_repo, employee):
    summary = DashboardService(attendance_repo, users_repo).employee_summary(employee.user_id, now=datetime(2024, 3, 1, 0, 0))

    assert summary == {"present": 0, "late": 0, "absent": 0, "totalHours": 0.0}


def test_manager_summary_counts_all_today_records(attendance_repo, users_repo, employee, manager):
    carol = users_repo.add(name="Carol", email="carol@example.com")
    users_repo.add(name="Dan", email="dan@example.com")
    today = datetime(2024, 3, 4, 12, 0)
    attendance_repo.add(user_id=employee.user_id, check_in_time=datetime(2024, 3, 4, 9, 0), status=AttendanceStatus.PRESENT)
    attendance_repo.add(user_id=carol.user_id, check_in_time=datetime(2024, 3, 4, 9, 50), status=AttendanceStatus.LATE)
    attendance_repo.add(user_id=manager.user_id, check_in_time=datetime(2024, 3, 4, 10, 0), status=AttendanceStatus.LATE)
    attendance_repo.add(user_id=employee.user_id, check_in_time=datetime(2024, 3, 3, 9, 0), status=AttendanceStatus.LATE)

    summary = DashboardService(attendance_repo, users_repo).manager_summary(now=today)

    # presentCount includes late arrivals and managers' own records
    assert summary == {"totalEmployees": 3, "presentCount": 3, "lateCount": 2}
