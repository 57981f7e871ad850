from __future__ import annotations

from datetime import timedelta

# Input/output date format (client inputs)
DT_FORMAT = "%d/%m/%Y - %H:%M"

# Explain output keeps milliseconds so the end-of-day sentinel stays visible
DT_FORMAT_MS = "%d/%m/%Y - %H:%M:%S.%f"

# Day-range materializer limits
MAX_RANGE_DAYS = 365

# Synthetic end of day: midnight of the next day minus this offset
END_OF_DAY_OFFSET = timedelta(milliseconds=1)

# Slicing
DEFAULT_SLOT_MINUTES = 30

# Holiday blocking
DEFAULT_HOLIDAY_COUNTRY = "ES"
WEEKEND_DAYS = {5, 6}  # Saturday=5, Sunday=6
