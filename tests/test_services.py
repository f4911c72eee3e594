from __future__ import annotations

import pytest

from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus, Role
from src.attendance_tracker.attendance_tracker.core.exceptions import AuthenticationError, ValidationError
from src.attendance_tracker.attendance_tracker.users.service import AuthService, UserService


def test_auth_wrong_password_raises(users_repo):
    users_repo.add(name="A", email="a@example.com", password="right-pw")

    auth = AuthService(users_repo)

    with pytest.raises(AuthenticationError):
        auth.authenticate("a@example.com", "wrong")


def test_auth_unknown_email_raises(users_repo):
    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("nobody@example.com", "whatever")


def test_auth_success_returns_session_user(users_repo):
    user = users_repo.add(name="A", email="a@example.com", password="right-pw", role=Role.MANAGER)

    s_user = AuthService(users_repo).authenticate("A@example.com ", "right-pw")

    assert s_user.user_id == user.user_id
    assert s_user.role == Role.MANAGER


def test_register_hashes_password_and_defaults_role(users_repo):
    svc = UserService(users_repo)

    user_id = svc.register(name=" Bob ", email="Bob@Example.com", password="secret1")

    user = users_repo.get_by_id(user_id)
    assert user.name == "Bob"
    assert user.email == "bob@example.com"
    assert user.role == Role.EMPLOYEE
    assert user.password_hash != "secret1"
    assert "password_hash" not in user.public_view()


def test_register_rejects_duplicate_email(users_repo):
    svc = UserService(users_repo)
    svc.register(name="Bob", email="bob@example.com", password="secret1")

    with pytest.raises(ValidationError):
        svc.register(name="Bob 2", email="bob@example.com", password="secret2")


def test_register_rejects_duplicate_employee_id_but_allows_missing(users_repo):
    svc = UserService(users_repo)
    svc.register(name="A", email="a@example.com", password="secret1", employee_id="E1")
    svc.register(name="B", email="b@example.com", password="secret1")
    svc.register(name="C", email="c@example.com", password="secret1", employee_id="  ")

    with pytest.raises(ValidationError):
        svc.register(name="D", email="d@example.com", password="secret1", employee_id="E1")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "", "email": "a@example.com", "password": "secret1"},
        {"name": "A", "email": "not-an-email", "password": "secret1"},
        {"name": "A", "email": "a@example.com", "password": "123"},
        {"name": "A", "email": "a@example.com", "password": "secret1", "role": "admin"},
    ],
)
def test_register_validation_errors(users_repo, kwargs):
    with pytest.raises(ValidationError):
        UserService(users_repo).register(**kwargs)


def test_attendance_checkin_on_time(attendance_service, attendance_repo, employee, fixed_now):
    attendance_service.check_in(employee.user_id, now=fixed_now)

    rec = attendance_repo.get_for_user_and_date(employee.user_id, fixed_now.date())
    assert rec is not None
    assert rec.status == AttendanceStatus.PRESENT


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "A", "email": "a@example.com", "password": 123456},
        {"name": "A", "email": ["a@example.com"], "password": "secret1"},
        {"name": 42, "email": "a@example.com", "password": "secret1"},
        {"name": "A", "email": "a@example.com", "password": "secret1", "employeeId": {"x": 1}},
    ],
)
def test_register_rejects_non_string_fields(users_repo, kwargs):
    kwargs["employee_id"] = kwargs.pop("employeeId", None)

    with pytest.raises(ValidationError):
        UserService(users_repo).register(**kwargs)


def test_auth_non_string_credentials_rejected(users_repo):
    users_repo.add(name="A", email="a@example.com", password="secret1")

    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("a@example.com", 123456)
