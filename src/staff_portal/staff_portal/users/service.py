from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import ASSIGNABLE_ROLES, Role
from ..core.exceptions import (
    AuthenticationError,
    Forbidden,
    ForbiddenTargetIsAdmin,
    InvalidRole,
    NotFoundError,
    ValidationError,
)
from .model import CreatedUser, Identity, User
from .repository import UserRepository
from .tokens import TokenService

logger = logging.getLogger(__name__)


def _parse_assignable_role(value) -> Role:
    try:
        role = Role(value)
    except ValueError:
        raise InvalidRole("Role must be either 'employee' or 'manager'")
    if role not in ASSIGNABLE_ROLES:
        raise InvalidRole("Role must be either 'employee' or 'manager'")
    return role


class AuthService:
    """Use case: log in and resolve bearer tokens into identities."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def authenticate(self, email: str, password: str) -> tuple[str, User]:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            logger.info("failed login for %s", user.email)
            raise AuthenticationError("Invalid email or password")

        return self._tokens.issue(user.user_id), user

    def resolve(self, token: str) -> Identity:
        """Token -> Identity, with the role read from the role store."""
        user_id = self._tokens.verify(token)
        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            raise AuthenticationError("Unauthorized")
        # Users without a role row get the least privileged role.
        return Identity(user_id=user.user_id, role=user.role or Role.EMPLOYEE)


class UserService:
    """Use case: privileged identity management (admin only)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def _require_admin(self, requesting_user_id: int, message: str) -> None:
        role = self._users.get_role(int(requesting_user_id))
        if role != Role.ADMIN:
            logger.warning("user %s denied: %s", requesting_user_id, message)
            raise Forbidden(message)

    def create_user(
        self,
        *,
        requesting_user_id: int,
        email: Optional[str],
        password: Optional[str],
        full_name: Optional[str],
        role: Optional[str],
    ) -> CreatedUser:
        self._require_admin(requesting_user_id, "Only admin can create users")

        if not email or not password or not full_name or not role:
            raise ValidationError("Missing required fields: email, password, fullName, role")

        new_role = _parse_assignable_role(role)
        email = require_email(email)
        full_name = require_non_empty(full_name, "Full name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("A user with this email already exists")

        user_id = self._users.create_user(
            email=email,
            password_hash=generate_password_hash(password),
            full_name=full_name,
            role=new_role,
        )
        logger.info("user %s created user %s (%s) as %s", requesting_user_id, user_id, email, new_role.value)
        return CreatedUser(user_id=user_id, email=email, full_name=full_name, role=new_role)

    def update_user_role(self, *, requesting_user_id: int, target_user_id, new_role: Optional[str]) -> Role:
        self._require_admin(requesting_user_id, "Only admin can update user roles")

        if not target_user_id or not new_role:
            raise ValidationError("Missing required fields: userId, newRole")

        role = _parse_assignable_role(new_role)
        try:
            target_id = int(target_user_id)
        except (TypeError, ValueError):
            raise ValidationError("userId is not valid")

        current = self._users.get_role(target_id)
        if current is None:
            raise NotFoundError("User not found")
        if current == Role.ADMIN:
            raise ForbiddenTargetIsAdmin("Cannot change admin role")

        if current != role and not self._users.set_role(target_id, role):
            # The role row changed to admin between the read and the update.
            raise ForbiddenTargetIsAdmin("Cannot change admin role")

        logger.info("user %s changed role of user %s: %s -> %s", requesting_user_id, target_id, current.value, role.value)
        return role

    def list_users(self, *, requesting_user_id: int) -> Sequence[User]:
        self._require_admin(requesting_user_id, "Only admin can list users")
        return self._users.list_with_roles()
