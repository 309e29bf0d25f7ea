"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_RECORD_ID = 999
ID_COUNTER_KEY = "attendance_records"

DISPLAY_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Largest value the store accepts for an integer _id (signed 64-bit).
MAX_STORABLE_INT = 2**63 - 1
