"""Example: run one refresh through the service layer (no Flask).

Controllers are a thin layer; the pipeline lives in AttendanceService.
"""

import importlib

from config import get_settings_module

from hr_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, backfill_on_refresh=False)
    service = container.attendance_service

    snapshot = service.refresh()
    print(f"{snapshot.today}: {len(snapshot.records)} record(s), {len(snapshot.schedules)} schedule(s)")
    for row in snapshot.records[:5]:
        print(service.to_ui(row))


if __name__ == "__main__":
    main()
