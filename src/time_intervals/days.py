from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List

from .config import END_OF_DAY_OFFSET, MAX_RANGE_DAYS
from .errors import DayRangeError, DayRangeErrorKind
from .intervals import Interval
from .models import DayIntervals

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def _as_utc(t: datetime) -> datetime:
    # Naive datetimes are already UTC wall-clock values
    if t.tzinfo is None:
        return t
    return t.astimezone(timezone.utc)


def normalize_date(t: datetime) -> datetime:
    """Midnight (UTC) of the calendar day containing t."""
    return _as_utc(t).replace(hour=0, minute=0, second=0, microsecond=0)


def same_day(a: datetime, b: datetime) -> bool:
    return _as_utc(a).date() == _as_utc(b).date()


def end_of_day(t: datetime) -> datetime:
    """Midnight of the next day minus one millisecond."""
    return normalize_date(t) + ONE_DAY - END_OF_DAY_OFFSET


def _add_to_day(by_day: Dict[datetime, List[Interval]], same_day_interval: Interval) -> None:
    key = normalize_date(same_day_interval.start)
    by_day.setdefault(key, []).append(same_day_interval)


def intervals_by_day(intervals: Iterable[Interval]) -> Dict[datetime, List[Interval]]:
    """
    Group intervals by UTC calendar day, splitting the ones that cross midnight.

    A split piece ending a day ends at the end-of-day sentinel
    (next midnight - 1 ms). Pieces keep input order within a day; nothing is
    merged or sorted, so feed ordered disjoint intervals for a canonical view.
    """
    by_day: Dict[datetime, List[Interval]] = {}

    for iv in intervals:
        if same_day(iv.start, iv.end):
            _add_to_day(by_day, iv)
            continue

        _add_to_day(by_day, Interval(iv.start, end_of_day(iv.start)))
        cursor = normalize_date(iv.start) + ONE_DAY
        while iv.end - cursor >= ONE_DAY:
            _add_to_day(by_day, Interval(cursor, cursor + ONE_DAY - END_OF_DAY_OFFSET))
            cursor += ONE_DAY
        _add_to_day(by_day, Interval(normalize_date(iv.end), iv.end))

    return by_day


def intervals_for_each_day_in_range(
    intervals: Iterable[Interval],
    start_day: datetime,
    end_day: datetime,
) -> List[DayIntervals]:
    """
    One DayIntervals per day from start_day to end_day (both inclusive),
    ordered by date. Days without coverage get an empty list.

    Raises DayRangeError if start_day is after end_day or the range spans
    more than MAX_RANGE_DAYS. Both checks use the raw arguments.
    """
    if start_day > end_day:
        raise DayRangeError(
            DayRangeErrorKind.START_AFTER_END,
            start_day,
            end_day,
            f"start day {start_day} is after end day {end_day}",
        )
    if end_day - start_day > timedelta(days=MAX_RANGE_DAYS):
        raise DayRangeError(
            DayRangeErrorKind.RANGE_TOO_LARGE,
            start_day,
            end_day,
            f"range exceeds {MAX_RANGE_DAYS} days",
        )

    by_day = intervals_by_day(intervals)

    result: List[DayIntervals] = []
    cursor = normalize_date(start_day)
    index = 0
    while cursor <= end_day:
        result.append(DayIntervals(date=cursor, index_since_first=index, intervals=by_day.get(cursor, [])))
        cursor += ONE_DAY
        index += 1

    logger.debug("intervals_for_each_day_in_range: %d days, %d with intervals", len(result), len(by_day))
    return result
