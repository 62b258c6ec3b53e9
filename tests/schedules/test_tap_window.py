from __future__ import annotations

from datetime import time

import pytest

from hr_attendance.core.enums import ClassTapStatus
from hr_attendance.schedules.tap_window import classify_class_tap, minutes_of

START = time(9, 0)
END = time(10, 30)


@pytest.mark.parametrize(
    ("now", "status", "can_tap"),
    [
        (8 * 60 + 59, ClassTapStatus.EARLY, False),
        (9 * 60, ClassTapStatus.PRESENT, True),
        (9 * 60 + 15, ClassTapStatus.PRESENT, True),
        (9 * 60 + 16, ClassTapStatus.LATE, True),
        (10 * 60 + 30, ClassTapStatus.LATE, True),
        (10 * 60 + 31, ClassTapStatus.ABSENT, False),
    ],
)
def test_classify_class_tap(now, status, can_tap):
    window = classify_class_tap(now, START, END)
    assert window.status == status
    assert window.can_tap is can_tap


def test_custom_grace():
    assert classify_class_tap(9 * 60 + 5, START, END, grace_minutes=0).status == ClassTapStatus.LATE


def test_minutes_of_ignores_seconds():
    assert minutes_of(time(13, 45, 59)) == 13 * 60 + 45
