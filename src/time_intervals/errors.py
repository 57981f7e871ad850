from __future__ import annotations

from datetime import datetime
from enum import Enum, unique


@unique
class DayRangeErrorKind(Enum):
    START_AFTER_END = "start_after_end"
    RANGE_TOO_LARGE = "range_too_large"


class DayRangeError(ValueError):
    """Requested day range cannot be materialized."""

    def __init__(self, kind: DayRangeErrorKind, start_day: datetime, end_day: datetime, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.start_day = start_day
        self.end_day = end_day
