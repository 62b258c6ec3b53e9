from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles known to the attendance engine."""

    HR = "HR"
    HR_ADMIN = "HRAdmin"
    FACULTY = "Faculty"
    SA = "SA"
    ACCOUNTING = "Accounting"
    STAFF = "Staff"
    GUARD = "Guard"


# Roles whose members are expected to tap every working day.
TRACKED_ROLES = (Role.FACULTY, Role.SA, Role.ACCOUNTING, Role.STAFF)


class AttendanceStatus(str, Enum):
    """Resolved attendance status shown on the dashboards."""

    PRESENT = "Present"
    LATE = "Late"
    ABSENT = "Absent"
    EXEMPTED = "Exempted"


class Session(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"


class ExemptionType(str, Enum):
    FULL_DAY = "full_day"
    TIME_SPECIFIC = "time_specific"


class ClassTapStatus(str, Enum):
    """State of a class schedule's tap window at a given moment."""

    EARLY = "Early"
    PRESENT = "Present"
    LATE = "Late"
    ABSENT = "Absent"
