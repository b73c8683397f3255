"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_WORKING_HOURS_PER_DAY = 8
MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * 60

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

# Task listings
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
