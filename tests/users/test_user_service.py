from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from staff_portal.core.enums import Role
from staff_portal.core.exceptions import (
    AuthenticationError,
    Forbidden,
    ForbiddenTargetIsAdmin,
    InvalidRole,
    NotFoundError,
    ValidationError,
)
from staff_portal.users.service import AuthService, UserService
from staff_portal.users.tokens import TokenService

from conftest import ADMIN_ID, EMPLOYEE_ID, MANAGER_ID, UNLINKED_ID


def test_authenticate_returns_token_for_valid_credentials(users_repo):
    tokens = TokenService("test-secret")
    auth = AuthService(users_repo, tokens)

    token, user = auth.authenticate("Employee@Example.com ", "employee123")

    assert user.user_id == EMPLOYEE_ID
    assert tokens.verify(token) == EMPLOYEE_ID


def test_authenticate_wrong_password_raises(users_repo):
    auth = AuthService(users_repo, TokenService("test-secret"))

    with pytest.raises(AuthenticationError):
        auth.authenticate("employee@example.com", "wrong")


def test_authenticate_inactive_user_raises(users_repo):
    users_repo.add("gone@example.com", "gone1234", Role.EMPLOYEE, is_active=False)
    auth = AuthService(users_repo, TokenService("test-secret"))

    with pytest.raises(AuthenticationError):
        auth.authenticate("gone@example.com", "gone1234")


def test_resolve_reads_role_from_store(users_repo):
    tokens = TokenService("test-secret")
    auth = AuthService(users_repo, tokens)

    assert auth.resolve(tokens.issue(MANAGER_ID)).role == Role.MANAGER
    # A user with no role row is treated as an employee.
    assert auth.resolve(tokens.issue(UNLINKED_ID)).role == Role.EMPLOYEE


def test_token_from_other_secret_is_rejected():
    token = TokenService("other-secret").issue(ADMIN_ID)

    with pytest.raises(AuthenticationError):
        TokenService("test-secret").verify(token)


def test_expired_token_is_rejected():
    tokens = TokenService("test-secret", ttl_minutes=5)
    token = tokens.issue(ADMIN_ID, now=datetime.now(timezone.utc) - timedelta(hours=1))

    with pytest.raises(AuthenticationError):
        tokens.verify(token)


def test_create_user_requires_admin(users_repo):
    svc = UserService(users_repo)

    with pytest.raises(Forbidden):
        svc.create_user(
            requesting_user_id=MANAGER_ID,
            email="new@example.com",
            password="secret1",
            full_name="New Person",
            role="employee",
        )


def test_create_user_checks_admin_before_fields(users_repo):
    svc = UserService(users_repo)

    with pytest.raises(Forbidden):
        svc.create_user(requesting_user_id=EMPLOYEE_ID, email=None, password=None, full_name=None, role=None)


def test_create_user_missing_fields(users_repo):
    svc = UserService(users_repo)

    with pytest.raises(ValidationError, match="Missing required fields"):
        svc.create_user(requesting_user_id=ADMIN_ID, email="x@example.com", password="", full_name="X", role="employee")


@pytest.mark.parametrize("role", ["admin", "superuser"])
def test_create_user_rejects_unassignable_role(users_repo, role):
    svc = UserService(users_repo)

    with pytest.raises(InvalidRole):
        svc.create_user(
            requesting_user_id=ADMIN_ID,
            email="new@example.com",
            password="secret1",
            full_name="New Person",
            role=role,
        )


def test_create_user_short_password(users_repo):
    svc = UserService(users_repo)

    with pytest.raises(ValidationError, match="at least 6"):
        svc.create_user(
            requesting_user_id=ADMIN_ID, email="new@example.com", password="12345", full_name="N", role="manager"
        )


def test_create_user_duplicate_email(users_repo):
    svc = UserService(users_repo)

    with pytest.raises(ValidationError, match="already exists"):
        svc.create_user(
            requesting_user_id=ADMIN_ID, email="employee@example.com", password="secret1", full_name="D", role="employee"
        )


def test_create_user_stores_role(users_repo):
    svc = UserService(users_repo)

    created = svc.create_user(
        requesting_user_id=ADMIN_ID,
        email="New@Example.com",
        password="secret1",
        full_name="New Person",
        role="manager",
    )

    assert created.email == "new@example.com"
    assert created.role == Role.MANAGER
    assert users_repo.get_role(created.user_id) == Role.MANAGER
    assert created.to_dict() == {
        "id": created.user_id,
        "email": "new@example.com",
        "fullName": "New Person",
        "role": "manager",
    }


def test_update_user_role_promotes_employee(users_repo):
    svc = UserService(users_repo)

    assert svc.update_user_role(requesting_user_id=ADMIN_ID, target_user_id=EMPLOYEE_ID, new_role="manager") == Role.MANAGER
    assert users_repo.get_role(EMPLOYEE_ID) == Role.MANAGER


def test_update_user_role_never_touches_admin(users_repo):
    svc = UserService(users_repo)

    with pytest.raises(ForbiddenTargetIsAdmin):
        svc.update_user_role(requesting_user_id=ADMIN_ID, target_user_id=ADMIN_ID, new_role="employee")
    assert users_repo.get_role(ADMIN_ID) == Role.ADMIN


def test_update_user_role_requires_admin(users_repo):
    svc = UserService(users_repo)

    with pytest.raises(Forbidden):
        svc.update_user_role(requesting_user_id=MANAGER_ID, target_user_id=EMPLOYEE_ID, new_role="manager")
    assert users_repo.get_role(EMPLOYEE_ID) == Role.EMPLOYEE


def test_update_user_role_unknown_target(users_repo):
    svc = UserService(users_repo)

    with pytest.raises(NotFoundError):
        svc.update_user_role(requesting_user_id=ADMIN_ID, target_user_id=999, new_role="manager")


def test_update_user_role_rejects_admin_as_new_role(users_repo):
    svc = UserService(users_repo)

    with pytest.raises(InvalidRole):
        svc.update_user_role(requesting_user_id=ADMIN_ID, target_user_id=EMPLOYEE_ID, new_role="admin")


def test_list_users_requires_admin(users_repo):
    svc = UserService(users_repo)

    assert len(svc.list_users(requesting_user_id=ADMIN_ID)) == 5
    with pytest.raises(Forbidden):
        svc.list_users(requesting_user_id=MANAGER_ID)
