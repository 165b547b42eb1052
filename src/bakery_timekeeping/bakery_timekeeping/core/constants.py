"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time, timedelta

# Business timezone is a fixed offset with no DST.
BUSINESS_TZ_NAME = "Africa/Lagos"
BUSINESS_UTC_OFFSET = timedelta(hours=1)

DEFAULT_LATE_THRESHOLD = time(9, 15)
DEFAULT_LOCATION = "Main Bakery"

MAX_LEAVE_DAYS = 30
MIN_SHIFT_MINUTES = 30
MIN_REST_HOURS = 8

# Corrections may target today and the six days before it.
CORRECTION_WINDOW_DAYS = 7

DEFAULT_REPORT_DAYS = 7
