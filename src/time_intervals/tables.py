from __future__ import annotations

from typing import Iterable, List

import pandas as pd

from .intervals import Interval
from .models import DayIntervals
from .parsing import parse_dt

INTERVAL_COLUMNS = ["start", "end", "minutes"]


def intervals_to_frame(intervals: Iterable[Interval]) -> pd.DataFrame:
    rows = [{"start": iv.start, "end": iv.end, "minutes": iv.minutes} for iv in intervals]
    return pd.DataFrame(rows, columns=INTERVAL_COLUMNS)


def _cell_to_dt(value):
    if isinstance(value, str):
        return parse_dt(value)
    return pd.Timestamp(value).to_pydatetime()


def frame_to_intervals(df: pd.DataFrame) -> List[Interval]:
    """
    Read intervals from a frame with 'start'/'end' columns holding datetimes
    or date strings. Rows with a blank cell are skipped.
    """
    intervals: List[Interval] = []
    for _, row in df.iterrows():
        start = row.get("start")
        end = row.get("end")
        if pd.isna(start) or pd.isna(end):
            continue
        if isinstance(start, str) and not start.strip():
            continue
        if isinstance(end, str) and not end.strip():
            continue
        intervals.append(Interval(_cell_to_dt(start), _cell_to_dt(end)))
    return intervals


def days_to_frame(days: Iterable[DayIntervals]) -> pd.DataFrame:
    rows = [
        {
            "date": d.date,
            "index": d.index_since_first,
            "intervals": len(d.intervals),
            "minutes": d.free_seconds / 60.0,
        }
        for d in days
    ]
    return pd.DataFrame(rows, columns=["date", "index", "intervals", "minutes"])


def slots_to_frame(slots: Iterable[Interval]) -> pd.DataFrame:
    df = intervals_to_frame(slots)
    df.insert(0, "slot", range(len(df)))
    return df
