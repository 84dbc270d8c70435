"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "UTC"
WORK_HOURS_DISPLAY_DECIMALS = 1
DEFAULT_READ_RETRY_ATTEMPTS = 3
READ_RETRY_BACKOFF_SECONDS = 0.2
SECONDS_PER_HOUR = 3600
# Longest window `fill_gaps` may expand into one row per employee per day.
MAX_GAP_FILL_DAYS = 366
