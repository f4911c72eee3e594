"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_LATE_CUTOFF = time(9, 30)
DEFAULT_MIN_PASSWORD_LENGTH = 6
DATE_FORMAT = "%Y-%m-%d"
CSV_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
EMPLOYEE_FILTER_ALL = "all"
NOT_AVAILABLE = "N/A"
DEFAULT_SESSION_DAYS = 7
