from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_str, require_email, require_min_length, require_non_empty
from ..core.constants import DEFAULT_MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    name: str
    email: str
    role: Role
    employee_id: Optional[str]


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        if not isinstance(email, str) or not isinstance(password, str):
            raise AuthenticationError("Email and password are required")

        user = self._users.get_by_email(email.strip().lower())
        if not user:
            raise AuthenticationError("Email not found")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid password")

        return SessionUser(
            user_id=user.user_id,
            name=user.name,
            email=user.email,
            role=user.role,
            employee_id=user.employee_id,
        )


class UserService:
    """Use case: register and list users."""

    def __init__(self, users: UserRepository):
        self._users = users

    def register(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: Optional[str] = None,
        employee_id: Optional[str] = None,
        department: Optional[str] = None,
    ) -> int:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", DEFAULT_MIN_PASSWORD_LENGTH)
        employee_id = optional_str(employee_id)
        department = optional_str(department)

        try:
            role_value = Role(role or Role.EMPLOYEE.value)
        except ValueError:
            raise ValidationError("Role must be 'employee' or 'manager'")

        if self._users.get_by_email(email):
            raise ValidationError("Email already registered")
        if employee_id and self._users.get_by_employee_id(employee_id):
            raise ValidationError("Employee ID already registered")

        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role_value,
            employee_id=employee_id,
            department=department,
        )
        logger.info("registered user id=%s role=%s", user_id, role_value.value)
        return user_id

    def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get_by_id(user_id)

    def list_users(self, *, role: Optional[str] = None) -> Sequence[User]:
        role_filter = None
        if role:
            try:
                role_filter = Role(role)
            except ValueError:
                raise ValidationError("Role must be 'employee' or 'manager'")
        return self._users.list_users(role=role_filter)
