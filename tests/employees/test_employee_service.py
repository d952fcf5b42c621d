from __future__ import annotations

from datetime import date

import pytest

from staff_portal.core.enums import EmployeeStatus
from staff_portal.core.exceptions import Forbidden, NotFoundError, ValidationError
from staff_portal.employees.service import EmployeeService
from staff_portal.users.model import Identity

from conftest import ADMIN_ID, EMPLOYEE_ID, UNLINKED_ID


def test_get_linked_returns_own_record(employees_repo, employee):
    svc = EmployeeService(employees_repo)

    assert svc.get_linked(employee).employee_code == "EMP001"


def test_get_linked_none_for_unlinked_account(employees_repo, employee):
    svc = EmployeeService(employees_repo)

    assert svc.get_linked(Identity(user_id=UNLINKED_ID, role=employee.role)) is None


def test_require_owned_rejects_other_employee(employees_repo, employee):
    svc = EmployeeService(employees_repo)

    with pytest.raises(Forbidden):
        svc.require_owned(employee, 2)
    with pytest.raises(NotFoundError):
        svc.require_owned(employee, 99)


def test_require_owned_rejects_inactive_employee(employees_repo, employee, admin):
    svc = EmployeeService(employees_repo)
    svc.deactivate(admin, 1)

    with pytest.raises(Forbidden, match="inactive"):
        svc.require_owned(employee, 1)


def test_directory_is_for_approvers(employees_repo, employee, manager):
    svc = EmployeeService(employees_repo)

    assert len(svc.list_employees(manager)) == 3
    with pytest.raises(Forbidden):
        svc.list_employees(employee)


def test_directory_filters_by_status(employees_repo, admin):
    svc = EmployeeService(employees_repo)
    svc.deactivate(admin, 2)

    active = svc.list_employees(admin, status=EmployeeStatus.ACTIVE)

    assert [e.employee_code for e in active] == ["EMP001", "EMP003"]


def test_create_employee_admin_only(employees_repo, admin, manager):
    svc = EmployeeService(employees_repo)
    kwargs = dict(
        employee_code="EMP010",
        full_name="New Hire",
        email="Hire@Example.com",
        department="Sales",
        designation="Associate",
        date_of_joining=date(2025, 2, 1),
    )

    with pytest.raises(Forbidden):
        svc.create_employee(manager, **kwargs)

    created = svc.create_employee(admin, **kwargs)
    assert created.email == "hire@example.com"
    assert created.status == EmployeeStatus.ACTIVE
    assert created.user_id is None


def test_manager_edits_profile_but_not_link_or_status(employees_repo, manager):
    svc = EmployeeService(employees_repo)

    updated = svc.update_employee(manager, 1, {"designation": "Senior Developer", "phone": " 555-0100 "})
    assert updated.designation == "Senior Developer"
    assert updated.phone == "555-0100"

    with pytest.raises(Forbidden):
        svc.update_employee(manager, 1, {"status": "inactive"})
    with pytest.raises(Forbidden):
        svc.update_employee(manager, 1, {"user_id": 99})


def test_admin_relinks_employee(employees_repo, admin):
    svc = EmployeeService(employees_repo)

    updated = svc.update_employee(admin, 2, {"user_id": UNLINKED_ID})

    assert updated.user_id == UNLINKED_ID


def test_update_employee_rejects_unknown_fields(employees_repo, admin):
    svc = EmployeeService(employees_repo)

    with pytest.raises(ValidationError, match="Unknown fields"):
        svc.update_employee(admin, 1, {"salary": 1})


def test_employee_cannot_edit_directory(employees_repo, employee):
    svc = EmployeeService(employees_repo)

    with pytest.raises(Forbidden):
        svc.update_employee(employee, 1, {"full_name": "Me"})
    assert employees_repo.get_by_user_id(EMPLOYEE_ID).full_name == "Employee"


def test_deactivate_keeps_record(employees_repo, admin):
    svc = EmployeeService(employees_repo)

    svc.deactivate(admin, 1)

    assert employees_repo.get_by_id(1).status == EmployeeStatus.INACTIVE


def test_update_employee_rejects_non_numeric_user_id(employees_repo, admin):
    svc = EmployeeService(employees_repo)

    with pytest.raises(ValidationError, match="user_id is not valid"):
        svc.update_employee(admin, 1, {"user_id": "abc"})
    assert employees_repo.get_by_id(1).user_id == EMPLOYEE_ID


def test_create_employee_rejects_non_numeric_user_id(employees_repo, admin):
    svc = EmployeeService(employees_repo)

    with pytest.raises(ValidationError, match="user_id is not valid"):
        svc.create_employee(
            admin,
            employee_code="EMP011",
            full_name="New Hire",
            email="hire@example.com",
            department="Sales",
            designation="Associate",
            date_of_joining=date(2025, 2, 1),
            user_id="abc",
        )
    assert len(employees_repo.list_all()) == 3


def test_patch_employee_bad_user_id_is_400(client, auth_header):
    resp = client.patch("/employees/1", json={"user_id": "abc"}, headers=auth_header(ADMIN_ID))

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "user_id is not valid"}
