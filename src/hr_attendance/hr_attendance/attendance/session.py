from __future__ import annotations

from typing import Optional

from ..common.manila_time import to_manila_minutes
from ..core.constants import (
    AFTERNOON_END,
    AFTERNOON_SESSION_TAG,
    AFTERNOON_START,
    MORNING_SESSION_TAG,
    MORNING_START,
    NOON,
)
from ..core.enums import Session
from .model import AttendanceRecord


def _explicit_session(value) -> Optional[Session]:
    if value is None:
        return None
    try:
        return Session(value)
    except ValueError:
        return None


def classify_session(record: AttendanceRecord) -> Optional[Session]:
    """Decide which work session a tap belongs to.

    The stored ``session`` column wins. Older rows carry the session only as a
    tag inside ``notes``; the last resort is the Manila time of ``time_in``.
    """

    explicit = _explicit_session(record.session)
    if explicit is not None:
        return explicit

    notes = record.notes or ""
    if AFTERNOON_SESSION_TAG in notes:
        return Session.AFTERNOON
    if MORNING_SESSION_TAG in notes:
        return Session.MORNING

    minutes = to_manila_minutes(record.time_in)
    if minutes is not None:
        if MORNING_START <= minutes < NOON:
            return Session.MORNING
        if AFTERNOON_START <= minutes < AFTERNOON_END:
            return Session.AFTERNOON
    return None
