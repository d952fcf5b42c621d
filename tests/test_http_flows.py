from __future__ import annotations

from datetime import datetime

import pytest

from staff_portal.common import datetime_utils
from staff_portal.core.enums import AttendanceStatus, LeaveStatus

from conftest import EMPLOYEE_ID, MANAGER_ID, UNLINKED_ID


@pytest.fixture
def frozen_clock(monkeypatch, fixed_now):
    clock = {"now": fixed_now}
    for module in ("attendance.service", "leaves.service", "leaves.controller", "approvals.service"):
        monkeypatch.setattr(f"staff_portal.{module}.now_local", lambda: clock["now"])
    monkeypatch.setattr(datetime_utils, "now_local", lambda: clock["now"])
    return clock


def test_leave_request_end_to_end(client, auth_header, frozen_clock):
    employee, manager = auth_header(EMPLOYEE_ID), auth_header(MANAGER_ID)
    body = {"leave_type": "casual", "start_date": "2025-03-08", "end_date": "2025-03-09", "reason": "trip"}

    created = client.post("/leaves", json=body, headers=employee)
    assert created.status_code == 201
    leave = created.get_json()["leave"]
    assert leave["status"] == "pending"
    assert leave["days_count"] == 2

    pending = client.get("/leaves/pending", headers=manager).get_json()["leaves"]
    assert [lv["id"] for lv in pending] == [leave["id"]]

    decided = client.post(f"/approvals/leave/{leave['id']}", json={"decision": "approve"}, headers=manager)
    assert decided.status_code == 200
    assert decided.get_json()["record"]["status"] == "approved"
    assert decided.get_json()["record"]["approved_by"] == MANAGER_ID
    assert decided.get_json()["record"]["approved_at"] is not None

    again = client.post(f"/approvals/leave/{leave['id']}", json={"decision": "reject"}, headers=manager)
    assert again.status_code == 409

    history = client.get("/leaves", headers=employee).get_json()["leaves"]
    assert [(lv["leave_type"], lv["status"], lv["is_paid"]) for lv in history] == [("casual", "approved", True)]


def test_leave_rule_violations_map_to_409(client, auth_header, frozen_clock):
    employee = auth_header(EMPLOYEE_ID)
    too_soon = {"leave_type": "sick", "start_date": "2025-03-04", "end_date": "2025-03-04", "reason": "flu"}

    resp = client.post("/leaves", json=too_soon, headers=employee)

    assert resp.status_code == 409
    assert "in advance" in resp.get_json()["error"]


def test_bad_leave_dates_are_400(client, auth_header, frozen_clock):
    body = {"leave_type": "sick", "start_date": "10/03/2025", "end_date": "2025-03-10", "reason": "flu"}

    resp = client.post("/leaves", json=body, headers=auth_header(EMPLOYEE_ID))

    assert resp.status_code == 400


def test_employee_cannot_decide(client, auth_header, frozen_clock):
    resp = client.post("/approvals/leave/1", json={"decision": "approve"}, headers=auth_header(EMPLOYEE_ID))

    assert resp.status_code == 403


def test_attendance_day(client, auth_header, frozen_clock):
    employee = auth_header(EMPLOYEE_ID)

    assert client.post("/attendance/check-in", headers=employee).status_code == 201
    assert client.post("/attendance/check-in", headers=employee).status_code == 409

    frozen_clock["now"] = datetime(2025, 3, 3, 17, 45)
    out = client.post("/attendance/check-out", headers=employee)
    assert out.status_code == 200
    assert out.get_json()["record"]["work_hours"] == 8.5

    today = client.get("/attendance/today", headers=employee).get_json()["record"]
    assert today["check_out"] == "17:45:00"

    history = client.get("/attendance/history?month=2025-03", headers=employee).get_json()["records"]
    assert len(history) == 1


def test_unlinked_account_reads_get_friendly_response(client, auth_header, frozen_clock):
    resp = client.get("/attendance/today", headers=auth_header(UNLINKED_ID))

    assert resp.status_code == 200
    assert resp.get_json()["linked"] is False


@pytest.mark.parametrize(
    "path, body",
    [
        ("/attendance/check-in", None),
        ("/attendance/check-out", None),
        ("/leaves", {"leave_type": "casual", "start_date": "2025-03-10", "end_date": "2025-03-10", "reason": "trip"}),
    ],
)
def test_unlinked_account_cannot_write(client, auth_header, frozen_clock, leaves_repo, attendance_repo, path, body):
    resp = client.post(path, json=body, headers=auth_header(UNLINKED_ID))

    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Your account is not linked to an employee record"}
    assert leaves_repo.list_by_status(LeaveStatus.PENDING) == []
    assert attendance_repo.list_by_status(AttendanceStatus.PENDING) == []


def test_leave_balance_defaults_to_current_month(client, auth_header, frozen_clock):
    resp = client.get("/leaves/balance", headers=auth_header(EMPLOYEE_ID))

    assert resp.get_json()["balance"]["month"] == "2025-03"
    assert resp.get_json()["balance"]["paid_remaining"] == 2
