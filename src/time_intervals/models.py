from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .intervals import Interval


@dataclass
class DayIntervals:
    date: datetime                  # midnight UTC
    index_since_first: int
    intervals: List[Interval] = field(default_factory=list)

    @property
    def free_seconds(self) -> int:
        return int(sum(iv.duration.total_seconds() for iv in self.intervals))


@dataclass
class AvailabilityRequest:
    available: List[Interval]
    blocked: List[Interval]
    start_day: datetime
    end_day: datetime
    slot_minutes: Optional[int] = None
    holiday_country: Optional[str] = None      # e.g. "ES"; None disables holiday blocking
    include_weekends: bool = False             # block Saturdays and Sundays


@dataclass
class AvailabilityResult:
    free: List[Interval]
    days: List[DayIntervals]
    slots: List[Interval]
    free_seconds: int

    # Explain / evidence
    explain: Dict[str, Any]
