from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import APPROVER_ROLES, Role


@dataclass(frozen=True)
class User:
    """Domain entity: authentication principal.

    Note: Plain data object (no DB access code). `role` comes from the
    user_roles table and is None when no role row exists.
    """

    user_id: int
    email: str
    full_name: str
    password_hash: str
    role: Optional[Role]
    is_active: bool = True
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Identity:
    """Who is calling. Passed explicitly into every service operation."""

    user_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def can_approve(self) -> bool:
        return self.role in APPROVER_ROLES


@dataclass(frozen=True)
class CreatedUser:
    user_id: int
    email: str
    full_name: str
    role: Role

    def to_dict(self) -> dict:
        return {"id": self.user_id, "email": self.email, "fullName": self.full_name, "role": self.role.value}
