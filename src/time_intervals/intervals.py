from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import IntEnum, unique
from typing import Iterable, List, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Interval:
    """Half-open range [start, end) on the timeline."""

    start: datetime
    end: datetime

    def is_valid(self) -> bool:
        return self.end > self.start

    def is_empty(self) -> bool:
        return self.end == self.start

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def minutes(self) -> float:
        return self.duration.total_seconds() / 60.0

    def contains(self, t: datetime) -> bool:
        return self.start <= t < self.end

    def clip(self, window_start: datetime, window_end: datetime) -> Optional["Interval"]:
        """
        Clip interval to [window_start, window_end]. If no overlap, return None.
        """
        if self.end <= window_start or self.start >= window_end:
            return None
        new_start = max(self.start, window_start)
        new_end = min(self.end, window_end)
        clipped = Interval(new_start, new_end)
        return clipped if clipped.is_valid() else None

    def __str__(self) -> str:
        return f"({self.start} -> {self.end})[{self.minutes:f} minutes]"


@unique
class IntervalKind(IntEnum):
    AVAILABLE = 0
    BLOCKED = 1


@unique
class EndpointSide(IntEnum):
    # OPEN sorts first so intervals touching at one instant fuse in the sweep
    OPEN = 0
    CLOSE = 1


class Endpoint(NamedTuple):
    """One side of an input interval. Tuple order is the sweep order."""

    time: datetime
    side: EndpointSide
    kind: IntervalKind


def build_endpoints(available: Iterable[Interval], blocked: Iterable[Interval]) -> List[Endpoint]:
    """
    Build a heap of endpoints: two per input interval, ordered by time,
    then OPEN before CLOSE, then AVAILABLE before BLOCKED.
    """
    endpoints: List[Endpoint] = []
    for kind, intervals in ((IntervalKind.AVAILABLE, available), (IntervalKind.BLOCKED, blocked)):
        for iv in intervals:
            endpoints.append(Endpoint(iv.start, EndpointSide.OPEN, kind))
            endpoints.append(Endpoint(iv.end, EndpointSide.CLOSE, kind))
    heapq.heapify(endpoints)
    return endpoints


def _next_counts(e: Endpoint, open_available: int, open_blocked: int) -> Tuple[int, int]:
    step = 1 if e.side == EndpointSide.OPEN else -1
    if e.kind == IntervalKind.AVAILABLE:
        return open_available + step, open_blocked
    return open_available, open_blocked + step


def subtract_blocked(available: Iterable[Interval], blocked: Iterable[Interval]) -> List[Interval]:
    """
    Return union(available) minus union(blocked) as ordered disjoint intervals.

    Single sweep over the endpoint heap keeping the number of open available
    and open blocked intervals. A time is free while at least one available
    interval is open and no blocked interval is. An output interval starts
    when that predicate turns true and is emitted when it turns false.

    Output is sorted by start, every interval has start < end and consecutive
    intervals are separated by a gap of positive length.
    """
    heap = build_endpoints(available, blocked)
    n_endpoints = len(heap)

    results: List[Interval] = []
    open_available = 0
    open_blocked = 0
    current_start: Optional[datetime] = None

    while heap:
        e = heapq.heappop(heap)
        next_available, next_blocked = _next_counts(e, open_available, open_blocked)

        was_free = open_available > 0 and open_blocked == 0
        is_free = next_available > 0 and next_blocked == 0

        if was_free and not is_free:
            # closing; simultaneous endpoints may leave nothing to emit
            if current_start < e.time:
                results.append(Interval(current_start, e.time))
        elif is_free and not was_free:
            if results and results[-1].end == e.time:
                # zero-length block: reopen the piece that just closed
                current_start = results.pop().start
            else:
                current_start = e.time

        open_available, open_blocked = next_available, next_blocked

    logger.debug("subtract_blocked: %d endpoints -> %d intervals", n_endpoints, len(results))
    return results


def merge_non_overlapping(intervals: Iterable[Interval]) -> List[Interval]:
    """
    Merge overlapping/touching intervals. Touching means end == next.start.
    """
    return subtract_blocked(intervals, [])


def merge_intervals(intervals: List[Interval]) -> List[Interval]:
    """
    Merge overlapping/touching intervals, dropping zero-length and inverted ones.
    """
    return merge_non_overlapping(i for i in intervals if i.is_valid())
