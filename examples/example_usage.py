"""Example: calling the service layer directly (no Flask).

Controllers are a thin layer; the attendance rules live in the services.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.hr_attendance.hr_attendance.common.datetime_utils import month_range
from src.hr_attendance.hr_attendance.container import build_container
from src.hr_attendance.hr_attendance.core.actor import Actor
from src.hr_attendance.hr_attendance.core.enums import Role


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    hr = Actor(
        actor_id=1,
        role=Role.HR,
        visible_employee_ids=frozenset(container.employee_directory.list_ids_managed_by(1)),
    )
    today = date.today()
    start, end = month_range(today.year, today.month)
    rows = container.query_service.query_attendance(hr, start, end, "jane")
    for summary in container.query_service.summarize(rows):
        print(summary)


if __name__ == "__main__":
    main()
