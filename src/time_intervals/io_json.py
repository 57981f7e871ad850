from __future__ import annotations

import json
from typing import Any, Dict, List

from .formatting import fmt_dt
from .intervals import Interval
from .models import AvailabilityRequest, AvailabilityResult
from .parsing import parse_dt


def _parse_intervals(items: List[Dict[str, Any]]) -> List[Interval]:
    return [Interval(start=parse_dt(i["start"]), end=parse_dt(i["end"])) for i in items]


def _interval_dict(iv: Interval, with_ms: bool = False) -> Dict[str, str]:
    return {"start": fmt_dt(iv.start, with_ms), "end": fmt_dt(iv.end, with_ms)}


def _iso_interval_dict(iv: Interval) -> Dict[str, str]:
    # full resolution, read back by parse_dt
    return {"start": iv.start.isoformat(), "end": iv.end.isoformat()}


def request_from_dict(data: Dict[str, Any]) -> AvailabilityRequest:
    slot_minutes = data.get("slot_minutes")
    return AvailabilityRequest(
        available=_parse_intervals(data.get("available", [])),
        blocked=_parse_intervals(data.get("blocked", [])),
        start_day=parse_dt(data["start_day"]),
        end_day=parse_dt(data["end_day"]),
        slot_minutes=int(slot_minutes) if slot_minutes is not None else None,
        holiday_country=data.get("holiday_country") or None,
        include_weekends=bool(data.get("include_weekends", False)),
    )


def request_to_dict(request: AvailabilityRequest) -> Dict[str, Any]:
    return {
        "start_day": request.start_day.isoformat(),
        "end_day": request.end_day.isoformat(),
        "slot_minutes": request.slot_minutes,
        "holiday_country": request.holiday_country,
        "include_weekends": request.include_weekends,
        "available": [_iso_interval_dict(iv) for iv in request.available],
        "blocked": [_iso_interval_dict(iv) for iv in request.blocked],
    }


def load_availability_request(path: str) -> AvailabilityRequest:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return request_from_dict(data)


def result_to_dict(result: AvailabilityResult) -> Dict[str, Any]:
    return {
        "free": [_interval_dict(iv, with_ms=True) for iv in result.free],
        "free_seconds": result.free_seconds,
        "days": [
            {
                "date": fmt_dt(d.date),
                "index": d.index_since_first,
                "intervals": [_interval_dict(iv, with_ms=True) for iv in d.intervals],
            }
            for d in result.days
        ],
        "slots": [_interval_dict(iv) for iv in result.slots],
        "explain": result.explain,
    }
