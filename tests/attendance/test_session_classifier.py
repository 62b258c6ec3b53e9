from __future__ import annotations

from datetime import date

from hr_attendance.attendance.model import AttendanceRecord, PersistedId
from hr_attendance.attendance.session import classify_session
from hr_attendance.core.enums import Session


def _record(**kwargs) -> AttendanceRecord:
    return AttendanceRecord(identity=PersistedId(1), user_id=7, att_date=date(2024, 3, 1), **kwargs)


def test_explicit_session_is_trusted():
    # time_in would say morning, the column says afternoon
    rec = _record(session=Session.AFTERNOON, time_in="2024-02-29T23:30:00", notes="Morning session")
    assert classify_session(rec) == Session.AFTERNOON


def test_notes_tag_is_used_when_column_missing():
    assert classify_session(_record(notes="Tapped in - Morning session")) == Session.MORNING
    assert classify_session(_record(notes="Afternoon session (auto)")) == Session.AFTERNOON


def test_time_window_inference():
    # 23:30Z -> 07:30 Manila
    assert classify_session(_record(time_in="2024-02-29T23:30:00")) == Session.MORNING
    # 05:00Z -> 13:00 Manila
    assert classify_session(_record(time_in="2024-03-01T05:00:00Z")) == Session.AFTERNOON


def test_window_edges():
    # 12:00 Manila is outside the morning window, 18:59 is still afternoon
    assert classify_session(_record(time_in="2024-03-01T04:00:00Z")) is None
    assert classify_session(_record(time_in="2024-03-01T10:59:00Z")) == Session.AFTERNOON
    assert classify_session(_record(time_in="2024-03-01T11:00:00Z")) is None
    # 06:59 Manila
    assert classify_session(_record(time_in="2024-02-29T22:59:00Z")) is None


def test_unclassifiable_record():
    assert classify_session(_record()) is None
    assert classify_session(_record(time_in="garbage", notes="forgot my card")) is None
