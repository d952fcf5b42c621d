from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for users and their role rows.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_role(self, user_id: int) -> Optional[Role]:
        """None for an unknown user; users without a role row are employees."""

        raise NotImplementedError

    def create_user(self, *, email: str, password_hash: str, full_name: str, role: Role) -> int:
        """Insert the user and its role row in one transaction."""

        raise NotImplementedError

    def set_role(self, user_id: int, role: Role) -> bool:
        """Change a non-admin role. Returns False when nothing was updated."""

        raise NotImplementedError

    def list_with_roles(self) -> Sequence[User]:
        raise NotImplementedError
