"""Example: drive the service layer directly (no Flask).

Controllers are thin; business rules live in the services.
"""

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src" / "staff_portal"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from config import get_settings_module

from staff_portal.common.datetime_utils import now_local
from staff_portal.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)

    token, user = container.auth_service.authenticate("employee@example.com", "employee123")
    identity = container.auth_service.resolve(token)
    employee = container.employee_service.get_linked(identity)
    if not employee:
        print(f"{user.email} is not linked to an employee record")
        return

    today = now_local().date()
    for record in container.attendance_service.history(identity, employee.employee_id):
        print(record.to_dict())
    print(container.leave_service.balance(identity, employee.employee_id, month=(today.year, today.month)).to_dict())


if __name__ == "__main__":
    main()
