from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Set

import holidays

from .config import DEFAULT_HOLIDAY_COUNTRY, WEEKEND_DAYS
from .days import normalize_date
from .intervals import Interval

logger = logging.getLogger(__name__)


@dataclass
class HolidayCalendar:
    """
    Days on which a resource is not available at all: public holidays of a
    country (as listed by the "holidays" package) and, optionally, weekends.

    Blocked days are returned as full-day intervals [00:00, next 00:00), so
    consecutive blocked days fuse once merged.
    """

    country: Optional[str] = DEFAULT_HOLIDAY_COUNTRY  # None: weekends only
    include_weekends: bool = False
    _cache: Dict[int, Set[date]] = field(default_factory=dict, repr=False)  # lazy

    def holidays_for_year(self, year: int) -> Set[date]:
        if self.country is None:
            return set()
        if year in self._cache:
            return self._cache[year]
        try:
            country_days = holidays.country_holidays(self.country, years=[year])
        except NotImplementedError as e:
            raise ValueError(f"unknown holiday country {self.country!r}") from e
        self._cache[year] = set(country_days.keys())
        logger.debug("holidays %s %d: %d days", self.country, year, len(self._cache[year]))
        return self._cache[year]

    def is_blocked_day(self, d: date) -> bool:
        if self.include_weekends and d.weekday() in WEEKEND_DAYS:
            return True
        return d in self.holidays_for_year(d.year)

    def blocked_intervals(self, start_day: datetime, end_day: datetime) -> List[Interval]:
        """Full-day intervals for every blocked day in [start_day, end_day], both inclusive."""
        blocked: List[Interval] = []
        cursor = normalize_date(start_day)
        last = normalize_date(end_day)
        while cursor <= last:
            next_day = cursor + timedelta(days=1)
            if self.is_blocked_day(cursor.date()):
                blocked.append(Interval(cursor, next_day))
            cursor = next_day
        return blocked


def holiday_blocks(
    start_day: datetime,
    end_day: datetime,
    country: Optional[str] = DEFAULT_HOLIDAY_COUNTRY,
    include_weekends: bool = False,
) -> List[Interval]:
    cal = HolidayCalendar(country=country, include_weekends=include_weekends)
    return cal.blocked_intervals(start_day, end_day)
