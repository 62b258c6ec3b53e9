from __future__ import annotations

from datetime import date

import pytest

from hr_attendance.attendance.model import AttendanceRecord, PersistedId
from hr_attendance.attendance.resolver import StatusResolver
from hr_attendance.attendance.strategies.tap_strategy import is_late_minutes
from hr_attendance.core.enums import AttendanceStatus, ExemptionType, Session
from hr_attendance.exemptions.index import ExemptionIndex
from hr_attendance.exemptions.model import ExemptionLookup
from hr_attendance.holidays.index import HolidayIndex

DAY = date(2024, 3, 1)
CHRISTMAS = date(2024, 12, 25)

NO_HOLIDAYS = HolidayIndex()
NO_EXEMPTIONS = ExemptionIndex()


def _record(att_date: date = DAY, **kwargs) -> AttendanceRecord:
    return AttendanceRecord(identity=PersistedId(1), user_id=7, att_date=att_date, **kwargs)


def _leave(user_id: int, day: date) -> ExemptionIndex:
    return ExemptionIndex(
        entries={
            (user_id, day): ExemptionLookup(
                is_exempted=True, type=ExemptionType.FULL_DAY, reason="Sick leave", request_type="Leave"
            )
        }
    )


def _resolve(record: AttendanceRecord, holidays=NO_HOLIDAYS, exemptions=NO_EXEMPTIONS) -> AttendanceStatus:
    return StatusResolver().resolve(record, holidays, exemptions)


@pytest.mark.parametrize(
    "record",
    [
        _record(att_date=CHRISTMAS),
        _record(att_date=CHRISTMAS, explicit_present=False),
        _record(att_date=CHRISTMAS, time_in="2024-12-25T03:00:00"),
        _record(att_date=CHRISTMAS, time_in="2024-12-24T23:00:00", time_out="2024-12-25T09:00:00"),
    ],
)
def test_holiday_outranks_everything(record):
    holidays = HolidayIndex(titles={CHRISTMAS: "Christmas Day"})
    assert _resolve(record, holidays=holidays, exemptions=_leave(7, CHRISTMAS)) == AttendanceStatus.EXEMPTED
    assert _resolve(record, holidays=holidays) == AttendanceStatus.EXEMPTED


def test_exemption_beats_absence():
    assert _resolve(_record(), exemptions=_leave(7, DAY)) == AttendanceStatus.EXEMPTED
    assert _resolve(_record(explicit_present=False), exemptions=_leave(7, DAY)) == AttendanceStatus.EXEMPTED


def test_exemption_for_other_user_or_date_does_not_apply():
    assert _resolve(_record(), exemptions=_leave(8, DAY)) == AttendanceStatus.ABSENT
    assert _resolve(_record(), exemptions=_leave(7, date(2024, 3, 2))) == AttendanceStatus.ABSENT


def test_explicit_absence_flag():
    rec = _record(explicit_present=False, time_in="2024-02-29T23:00:00", time_out="2024-03-01T04:00:00")
    assert _resolve(rec) == AttendanceStatus.ABSENT


def test_no_activity_is_absent():
    assert _resolve(_record(time_in=None, time_out=None, explicit_present=None)) == AttendanceStatus.ABSENT
    assert _resolve(_record(time_in="", time_out="")) == AttendanceStatus.ABSENT


@pytest.mark.parametrize(
    "time_in, expected",
    [
        ("2024-02-29T23:00:00", AttendanceStatus.PRESENT),  # 07:00
        ("2024-02-29T23:15:00", AttendanceStatus.PRESENT),  # 07:15
        ("2024-02-29T23:16:00", AttendanceStatus.LATE),  # 07:16
        ("2024-03-01T05:15:00", AttendanceStatus.PRESENT),  # 13:15
        ("2024-03-01T05:16:00", AttendanceStatus.LATE),  # 13:16
    ],
)
def test_grace_boundaries(time_in, expected):
    assert _resolve(_record(time_in=time_in)) == expected


def test_half_past_seven_is_late():
    # 23:30 UTC without a marker is 07:30 in Manila
    assert _resolve(_record(time_in="2024-03-01T23:30:00")) == AttendanceStatus.LATE


@pytest.mark.parametrize(
    "time_in",
    [
        "2024-02-29T22:30:00Z",  # 06:30, before the morning window
        "2024-03-01T04:30:00Z",  # 12:30, lunch break
        "2024-03-01T12:00:00Z",  # 20:00, after the afternoon window
    ],
)
def test_check_in_outside_both_windows_is_late(time_in):
    assert _resolve(_record(time_in=time_in)) == AttendanceStatus.LATE


def test_completed_session_is_present_even_with_late_check_in():
    rec = _record(time_in="2024-02-29T23:45:00", time_out="2024-03-01T04:00:00")
    assert _resolve(rec) == AttendanceStatus.PRESENT


def test_check_out_only_is_present():
    assert _resolve(_record(time_out="2024-03-01T10:00:00")) == AttendanceStatus.PRESENT


def test_unparseable_check_in_is_not_late():
    assert _resolve(_record(time_in="yesterday-ish")) == AttendanceStatus.PRESENT


def test_is_late_minutes_edges():
    assert is_late_minutes(None) is False
    assert is_late_minutes(435) is False
    assert is_late_minutes(436) is True
    assert is_late_minutes(720) is True
    assert is_late_minutes(795) is False
    assert is_late_minutes(1140) is True
    assert is_late_minutes(1141) is True


def test_resolve_detailed_carries_display_fields():
    holidays = HolidayIndex(titles={DAY: "EDSA Revolution Anniversary"})
    rec = _record(time_in="2024-02-29T23:10:00", notes="Morning session")

    resolved = StatusResolver().resolve_detailed(rec, holidays, _leave(7, DAY))

    assert resolved.status == AttendanceStatus.EXEMPTED
    assert resolved.session == Session.MORNING
    assert resolved.is_holiday is True
    assert resolved.exemption.is_exempted is True
    assert resolved.exemption.reason == "Sick leave"


def test_decision_carries_holiday_title():
    holidays = HolidayIndex(titles={CHRISTMAS: "Christmas Day"})
    decision = StatusResolver().decide(_record(att_date=CHRISTMAS), holidays, NO_EXEMPTIONS)
    assert decision.note == "Christmas Day"


def test_empty_chain_falls_back_to_absent():
    resolver = StatusResolver(chain=[])
    assert resolver.resolve(_record(time_in="2024-02-29T23:00:00"), NO_HOLIDAYS, NO_EXEMPTIONS) == AttendanceStatus.ABSENT
