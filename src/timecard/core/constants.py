"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STANDARD_WORK_MINUTES = 8 * 60
DEFAULT_BREAK_THRESHOLD_HOURS = 6
DEFAULT_BREAK_MINUTES = 60
DEFAULT_LATE_GRACE_MINUTES = 0
DEFAULT_HISTORY_LIMIT = 20
# A clock-in older than this no longer keeps a session open across midnight.
MAX_OPEN_SESSION_HOURS = 16
