from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Dict, List

from .calendar_holidays import HolidayCalendar
from .days import intervals_for_each_day_in_range, normalize_date
from .formatting import fmt_dt
from .intervals import Interval, merge_intervals, subtract_blocked
from .models import AvailabilityRequest, AvailabilityResult
from .slicing import split_into_fixed_intervals

logger = logging.getLogger(__name__)


def _dt_str(dt) -> str:
    return fmt_dt(dt, with_ms=True)


def _iv_dict(iv: Interval) -> Dict[str, str]:
    return {"start": _dt_str(iv.start), "end": _dt_str(iv.end)}


def calculate(request: AvailabilityRequest) -> AvailabilityResult:
    """
    Availability for one request:
    - Inverted intervals (end before start) are rejected with evidence
    - Holidays (and weekends, if requested) are added as full-day blocks
    - Free time = union(available) - union(blocked), clipped to the day range
    - Free time is grouped per day over [start_day, end_day] and, if a slot
      width is given, cut into fixed slots

    DayRangeError from the day-range materializer propagates unchanged.
    """
    evidence: List[Dict[str, Any]] = []

    def keep_valid(kind: str, intervals: List[Interval]) -> List[Interval]:
        kept: List[Interval] = []
        for iv in intervals:
            if iv.end < iv.start:
                evidence.append({
                    "kind": kind,
                    "original": _iv_dict(iv),
                    "action": "rejected_invalid_interval",
                })
                continue
            if iv.is_empty():
                evidence.append({"kind": kind, "original": _iv_dict(iv), "action": "kept_empty_interval"})
            kept.append(iv)
        return kept

    available = keep_valid("available", request.available)
    blocked = keep_valid("blocked", request.blocked)

    holiday_blocked: List[Interval] = []
    if request.holiday_country or request.include_weekends:
        cal = HolidayCalendar(country=request.holiday_country, include_weekends=request.include_weekends)
        holiday_blocked = cal.blocked_intervals(request.start_day, request.end_day)

    free_all = subtract_blocked(available, blocked + holiday_blocked)

    window_start = normalize_date(request.start_day)
    window_end = normalize_date(request.end_day) + timedelta(days=1)
    free: List[Interval] = []
    for iv in free_all:
        clipped = iv.clip(window_start, window_end)
        if clipped is not None:
            free.append(clipped)

    days = intervals_for_each_day_in_range(free, request.start_day, request.end_day)

    slots: List[Interval] = []
    if request.slot_minutes is not None:
        slots = split_into_fixed_intervals(free, request.slot_minutes)

    free_seconds = int(sum(iv.duration.total_seconds() for iv in free))
    logger.debug("calculate: %d free intervals, %d days, %d slots", len(free), len(days), len(slots))

    explain: Dict[str, Any] = {
        "request": {
            "start_day": _dt_str(request.start_day),
            "end_day": _dt_str(request.end_day),
            "slot_minutes": request.slot_minutes,
            "holiday_country": request.holiday_country,
            "include_weekends": request.include_weekends,
        },
        "window": _iv_dict(Interval(window_start, window_end)),
        "evidence": evidence,
        "merged_available": [_iv_dict(iv) for iv in merge_intervals(available)],
        "merged_blocked": [_iv_dict(iv) for iv in merge_intervals(blocked + holiday_blocked)],
        "holiday_blocks": [_iv_dict(iv) for iv in holiday_blocked],
        "days": [
            {
                "date": _dt_str(d.date),
                "index": d.index_since_first,
                "intervals": len(d.intervals),
                "free_seconds": d.free_seconds,
            }
            for d in days
        ],
    }

    return AvailabilityResult(
        free=free,
        days=days,
        slots=slots,
        free_seconds=free_seconds,
        explain=explain,
    )
