"""Utility constants and helpers for caldelta.

Time unit constants represent durations in microseconds, the resolution
at which moments are compared and intervals are totalled.
"""

from datetime import datetime, timezone

# Time unit constants (all values in microseconds)
SECOND = 1_000_000
HOUR = 3600 * SECOND

HOURS_PER_DAY = 24
MINUTES_PER_HOUR = 60
SECONDS_PER_MINUTE = 60
MONTHS_PER_YEAR = 12

UTC = timezone.utc
EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
