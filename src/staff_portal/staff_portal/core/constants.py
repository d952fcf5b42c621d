"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ADVANCE_NOTICE_DAYS = 3
MONTHLY_PAID_LEAVE_QUOTA = 2
# datetime.weekday() value of the first day of a week (0 = Monday).
WEEK_START = 0

WORK_HOURS_PRECISION = 2
MIN_PASSWORD_LENGTH = 6
DEFAULT_HISTORY_LIMIT = 31
DEFAULT_LIST_LIMIT = 500
DEFAULT_TOKEN_TTL_MINUTES = 60 * 12
