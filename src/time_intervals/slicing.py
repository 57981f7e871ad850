from __future__ import annotations

import logging
from datetime import timedelta
from typing import Iterable, List

from .intervals import Interval

logger = logging.getLogger(__name__)


def split_into_fixed_intervals(ordered_disjoint_intervals: Iterable[Interval], width_minutes: int) -> List[Interval]:
    """
    Cut each interval into consecutive slices of width_minutes, starting at
    its start. A trailing remainder shorter than the width is dropped.
    """
    if width_minutes <= 0:
        logger.warning("split_into_fixed_intervals: non-positive width %r, nothing to split", width_minutes)
        return []

    width = timedelta(minutes=width_minutes)
    slices: List[Interval] = []
    for iv in ordered_disjoint_intervals:
        cursor = iv.start
        while cursor + width <= iv.end:
            slices.append(Interval(cursor, cursor + width))
            cursor += width
    return slices
