from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone

import pytest

from hr_attendance.attendance.model import AttendanceRecord, PersistedId
from hr_attendance.attendance.service import AttendanceService
from hr_attendance.common.datetime_utils import FixedClock
from hr_attendance.container import Container
from hr_attendance.core.exceptions import RefreshInProgressError
from hr_attendance.main import create_app
from hr_attendance.schedules.model import Schedule
from hr_attendance.users.model import User

TODAY = date(2024, 3, 1)
EVENING = FixedClock(datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc))


@dataclass
class InMemoryStore:
    """Every repository protocol backed by plain lists."""

    records: list[AttendanceRecord] = field(default_factory=list)
    users: list[User] = field(default_factory=list)
    schedules: list[Schedule] = field(default_factory=list)
    inserted: list = field(default_factory=list)

    def list_with_users(self, *, day_of_week=None):
        return list(self.records)

    def insert_absence(self, row):
        self.inserted.append(row)
        return len(self.inserted)

    def delete(self, attendance_id):
        before = len(self.records)
        self.records = [r for r in self.records if r.identity != PersistedId(attendance_id)]
        return len(self.records) < before

    def list_by_roles(self, roles):
        return [u for u in self.users if u.role in roles]

    def list_active_on(self, dates):
        return []

    def list_for(self, *, user_ids, dates):
        return []


@dataclass
class InMemorySchedules:
    schedules: list[Schedule] = field(default_factory=list)

    def list_with_users(self, *, day_of_week=None):
        return [s for s in self.schedules if day_of_week is None or s.day_of_week == day_of_week]

    def get_by_id(self, schedule_id):
        return next((s for s in self.schedules if s.schedule_id == schedule_id), None)

    def list_class_attendance(self, *, att_date=None):
        return []

    def insert_class_absence(self, row):
        return 1


@pytest.fixture()
def store():
    return InMemoryStore(
        records=[
            AttendanceRecord(
                identity=PersistedId(1),
                user_id=1,
                att_date=TODAY,
                time_in="2024-02-29T23:20:00",
                user_name="Ana",
                role="Faculty",
            )
        ],
        users=[User(user_id=1, name="Ana", role="Faculty"), User(user_id=2, name="Ben", role="Staff")],
    )


@pytest.fixture()
def schedules():
    return InMemorySchedules(
        [Schedule(schedule_id=3, user_id=1, day_of_week="Friday", start_time=time(19, 0), end_time=time(20, 30))]
    )


@pytest.fixture()
def app(monkeypatch, store, schedules):
    monkeypatch.setenv("APP_ENV", "testing")
    service = AttendanceService(store, store, store, store, schedules, EVENING)
    container = Container(
        conn=None,
        users_repo=store,
        attendance_repo=store,
        holidays_repo=store,
        exemptions_repo=store,
        schedules_repo=schedules,
        clock=EVENING,
        attendance_service=service,
    )
    return create_app(container=container)


def test_refresh_endpoint(app, store):
    resp = app.test_client().get("/api/attendance")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["today"] == "2024-03-01"
    assert body["backfilled"] == 1
    assert body["summary"]["Late"] == 1
    assert body["summary"]["Absent"] == 1
    assert [r["name"] for r in body["records"]] == ["Ana", "Ben"]
    assert body["records"][1]["id"] == "auto_absent_2_2024-03-01"
    assert body["schedules"][0]["attendance"] == "Absent"
    assert [r.user_id for r in store.inserted] == [2]


def test_refresh_conflict(app, monkeypatch):
    def busy(self):
        raise RefreshInProgressError("An attendance refresh is already running")

    monkeypatch.setattr(AttendanceService, "refresh", busy)

    resp = app.test_client().get("/api/attendance")

    assert resp.status_code == 409
    assert "already running" in resp.get_json()["error"]


def test_delete_endpoint(app):
    client = app.test_client()

    assert client.post("/api/attendance/1/delete").get_json() == {"deleted": 1}
    missing = client.post("/api/attendance/1/delete")
    assert missing.status_code == 400
    assert missing.get_json()["error"] == "Attendance record not found"


def test_tap_window_endpoint(app):
    client = app.test_client()

    resp = client.get("/api/schedules/3/tap-window")
    assert resp.get_json() == {"schedule_id": 3, "status": "Late", "can_tap": True}
    assert client.get("/api/schedules/99/tap-window").status_code == 404


def test_backfill_cli_command(app, store):
    result = app.test_cli_runner().invoke(args=["backfill-absences"])

    assert result.exit_code == 0
    assert "Inserted 1 automatic absence(s)" in result.output
    assert [r.user_id for r in store.inserted] == [2]


def test_class_backfill_cli_command(app):
    result = app.test_cli_runner().invoke(args=["backfill-class-absences"])

    assert result.exit_code == 0
    assert "Inserted 0 class absence(s)" in result.output
