from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..core.constants import CLASS_LATE_GRACE_MINUTES
from ..core.enums import ClassTapStatus


@dataclass(frozen=True)
class TapWindow:
    status: ClassTapStatus
    can_tap: bool


def minutes_of(value: time) -> int:
    return value.hour * 60 + value.minute


def classify_class_tap(
    now_minutes: int,
    start: time,
    end: time,
    *,
    grace_minutes: int = CLASS_LATE_GRACE_MINUTES,
) -> TapWindow:
    """Where ``now`` falls relative to a class slot.

    Taps are accepted from the start of class until it ends; the first
    ``grace_minutes`` count as on time.
    """

    start_m = minutes_of(start)
    end_m = minutes_of(end)

    if now_minutes < start_m:
        return TapWindow(ClassTapStatus.EARLY, can_tap=False)
    if now_minutes <= start_m + grace_minutes:
        return TapWindow(ClassTapStatus.PRESENT, can_tap=True)
    if now_minutes <= end_m:
        return TapWindow(ClassTapStatus.LATE, can_tap=True)
    return TapWindow(ClassTapStatus.ABSENT, can_tap=False)
