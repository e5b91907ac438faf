"""User aggregate for basic administration.

Users carry no credentials: verifying who is calling belongs to an
authentication collaborator that this package does not provide.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from wms.domain.exceptions import ValidationError


class UserRole(Enum):
    ADMINISTRATOR = "administrator"
    USER = "user"


class UserStatus(Enum):
    PENDING = "pending"
    ACTIVE = "active"


@dataclass
class User:
    username: str
    role: UserRole = UserRole.USER
    status: UserStatus = UserStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def register(username: str) -> User:
        """New accounts wait for an administrator's approval."""
        if not username or not username.strip():
            raise ValidationError("Username is required")
        return User(username=username.strip())

    def approve(self) -> None:
        if self.status == UserStatus.ACTIVE:
            raise ValidationError(f"User '{self.username}' is already active")
        self.status = UserStatus.ACTIVE

    def change_role(self, role: str) -> None:
        try:
            self.role = UserRole(role)
        except ValueError as exc:
            known = ", ".join(r.value for r in UserRole)
            raise ValidationError(f"Unknown role '{role}' (expected one of: {known})") from exc
