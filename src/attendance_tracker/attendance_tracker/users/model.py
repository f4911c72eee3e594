from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data object; holds no storage access code.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    employee_id: Optional[str] = None
    department: Optional[str] = None
    created_at: Optional[datetime] = None

    def public_view(self) -> dict:
        """Serializable view without the password hash."""
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "employeeId": self.employee_id,
            "department": self.department,
        }
