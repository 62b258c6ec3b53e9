"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MANILA_TZ_NAME = "Asia/Manila"

# Manila wall-clock minutes after midnight.
MORNING_START = 7 * 60
MORNING_GRACE_END = MORNING_START + 15
NOON = 12 * 60
AFTERNOON_START = 13 * 60
AFTERNOON_GRACE_END = AFTERNOON_START + 15
AFTERNOON_END = 19 * 60

BACKFILL_CUTOFF_MINUTES = AFTERNOON_END
ABSENT_PENALTY_AMOUNT = 240
AUTO_ABSENT_NOTE = "Automatic absent - No attendance recorded for both morning and afternoon sessions"

CLASS_LATE_GRACE_MINUTES = 15

MORNING_SESSION_TAG = "Morning session"
AFTERNOON_SESSION_TAG = "Afternoon session"

# Schedules store English weekday names; index with date.weekday().
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
