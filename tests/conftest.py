from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceRecord, AttendanceReportRow
from src.attendance_tracker.attendance_tracker.attendance.service import AttendanceService
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus, Role
from src.attendance_tracker.attendance_tracker.core.exceptions import DuplicateCheckIn
from src.attendance_tracker.attendance_tracker.users.model import User


class InMemoryUsers:
    def __init__(self):
        self._by_id: dict[int, User] = {}
        self._id = 0

    def add(self, *, name: str, email: str, password: str = "secret1", role: Role = Role.EMPLOYEE,
            employee_id: Optional[str] = None, department: Optional[str] = None) -> User:
        user_id = self.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            employee_id=employee_id,
            department=department,
        )
        return self._by_id[user_id]

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.employee_id == employee_id), None)

    def create_user(self, *, name, email, password_hash, role, employee_id=None, department=None) -> int:
        self._id += 1
        self._by_id[self._id] = User(
            user_id=self._id,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            employee_id=employee_id,
            department=department,
        )
        return self._id

    def list_users(self, *, role: Optional[Role] = None):
        items = [u for u in self._by_id.values() if role is None or u.role == role]
        return sorted(items, key=lambda u: u.name)

    def count_by_role(self, role: Role) -> int:
        return sum(1 for u in self._by_id.values() if u.role == role)


class InMemoryAttendance:
    """Keyed by (user_id, work_date) like the UNIQUE index of the real table."""

    def __init__(self, users: InMemoryUsers):
        self._users = users
        self._by_user_date: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0

    def add(self, *, user_id: int, check_in_time: datetime, status: AttendanceStatus,
            check_out_time: Optional[datetime] = None, total_hours: Optional[str] = None) -> AttendanceRecord:
        self._id += 1
        rec = AttendanceRecord(
            attendance_id=self._id,
            user_id=user_id,
            work_date=check_in_time.date(),
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            status=status,
            total_hours=Decimal(total_hours) if total_hours is not None else None,
        )
        self._by_user_date[(user_id, rec.work_date)] = rec
        return rec

    def all(self) -> list[AttendanceRecord]:
        return list(self._by_user_date.values())

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_user_date.get((user_id, work_date))

    def list_for_user(self, user_id: int):
        items = [r for r in self._by_user_date.values() if r.user_id == user_id]
        return sorted(items, key=lambda r: r.work_date, reverse=True)

    def create_checkin(self, *, user_id: int, work_date: date, check_in_time: datetime, status: AttendanceStatus) -> int:
        if (user_id, work_date) in self._by_user_date:
            raise DuplicateCheckIn("Already checked in today")
        self._id += 1
        self._by_user_date[(user_id, work_date)] = AttendanceRecord(
            attendance_id=self._id,
            user_id=user_id,
            work_date=work_date,
            check_in_time=check_in_time,
            check_out_time=None,
            status=status,
        )
        return self._id

    def update_checkout(self, *, attendance_id: int, check_out_time: datetime, total_hours: Decimal,
                        only_if_open: bool = True) -> bool:
        for k, v in list(self._by_user_date.items()):
            if v.attendance_id != attendance_id:
                continue
            if only_if_open and v.check_out_time is not None:
                return False
            self._by_user_date[k] = AttendanceRecord(
                attendance_id=v.attendance_id,
                user_id=v.user_id,
                work_date=v.work_date,
                check_in_time=v.check_in_time,
                check_out_time=check_out_time,
                status=v.status,
                total_hours=total_hours,
            )
            return True
        return False

    def list_since(self, *, start_date: date, user_id: Optional[int] = None):
        items = [
            r for r in self._by_user_date.values()
            if r.work_date >= start_date and (user_id is None or r.user_id == user_id)
        ]
        return sorted(items, key=lambda r: r.work_date, reverse=True)

    def get_report_rows(self, *, start_date=None, end_date=None, employee_id=None):
        rows = []
        for r in self._by_user_date.values():
            user = self._users.get_by_id(r.user_id)
            if start_date is not None and r.work_date < start_date:
                continue
            if end_date is not None and r.work_date > end_date:
                continue
            if employee_id is not None and not _matches_employee(r.user_id, user, employee_id):
                continue
            rows.append(
                AttendanceReportRow(
                    attendance_id=r.attendance_id,
                    user_id=r.user_id,
                    name=user.name if user else None,
                    email=user.email if user else None,
                    employee_id=user.employee_id if user else None,
                    work_date=r.work_date,
                    check_in_time=r.check_in_time,
                    check_out_time=r.check_out_time,
                    status=r.status,
                    total_hours=r.total_hours,
                )
            )
        rows.sort(key=lambda x: x.user_id)
        rows.sort(key=lambda x: x.work_date, reverse=True)
        return rows


def _matches_employee(user_id: int, user: Optional[User], employee_id: str) -> bool:
    if user and user.employee_id == employee_id:
        return True
    return employee_id.isdigit() and int(employee_id) == user_id


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 15, 9, 0, 0)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def attendance_repo(users_repo) -> InMemoryAttendance:
    return InMemoryAttendance(users_repo)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def employee(users_repo) -> User:
    return users_repo.add(name="Alice", email="alice@example.com", employee_id="EMP-001")


@pytest.fixture
def manager(users_repo) -> User:
    return users_repo.add(name="Mona", email="mona@example.com", role=Role.MANAGER, employee_id="MGR-001")


@pytest.fixture
def attendance_service(attendance_repo, users_repo, clock) -> AttendanceService:
    return AttendanceService(attendance_repo, users_repo, clock=clock)
