"""Conversion of raw store timestamps into Manila civil time.

The store keeps timestamps in UTC and frequently omits the zone marker, so a
value without ``Z`` or an offset is read as UTC. Bare dates are UTC midnight.
Nothing here raises on bad input: unparseable values become ``None``.
"""
from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

from dateutil.parser import isoparse

from ..core.constants import MANILA_TZ_NAME
from .datetime_utils import Clock

MANILA = ZoneInfo(MANILA_TZ_NAME)

RawTimestamp = Union[str, datetime, date, None]


def to_manila_datetime(raw: RawTimestamp) -> Optional[datetime]:
    if raw is None:
        return None

    if isinstance(raw, datetime):
        parsed = raw
    elif isinstance(raw, date):
        parsed = datetime.combine(raw, time.min)
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            parsed = isoparse(text)
        except (ValueError, OverflowError):
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(MANILA)
    except (ValueError, OverflowError):
        return None


def to_manila_minutes(raw: RawTimestamp) -> Optional[int]:
    """Wall-clock minutes after midnight in Manila, or None when unknown."""

    local = to_manila_datetime(raw)
    if local is None:
        return None
    return local.hour * 60 + local.minute


def manila_now(clock: Clock) -> datetime:
    return clock.now_utc().astimezone(MANILA)


def manila_today(clock: Clock) -> date:
    return manila_now(clock).date()


def manila_now_minutes(clock: Clock) -> int:
    now = manila_now(clock)
    return now.hour * 60 + now.minute


def _twelve_hour(hours: int, minutes: int) -> str:
    period = "PM" if hours >= 12 else "AM"
    display = 12 if hours % 12 == 0 else hours % 12
    return f"{display}:{minutes:02d} {period}"


def format_manila_clock(raw: RawTimestamp) -> str:
    """Render a stored timestamp as e.g. ``7:30 AM`` in Manila time."""

    local = to_manila_datetime(raw)
    if local is None:
        return "N/A"
    return _twelve_hour(local.hour, local.minute)


def format_clock_12h(value: Union[str, time, None]) -> str:
    """Render a store TIME value (``HH:MM[:SS]``) on a 12-hour clock.

    Values that are not a valid time of day are returned unchanged.
    """

    if value is None or value == "":
        return "N/A"
    if isinstance(value, time):
        return _twelve_hour(value.hour, value.minute)

    parts = str(value).split(":")
    if len(parts) < 2:
        return str(value)
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return str(value)
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        return str(value)
    return _twelve_hour(hours, minutes)
