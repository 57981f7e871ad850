import heapq
import itertools
from datetime import datetime, timedelta

from time_intervals.intervals import (
    EndpointSide,
    Interval,
    IntervalKind,
    build_endpoints,
    merge_intervals,
    merge_non_overlapping,
    subtract_blocked,
)

base = datetime(2018, 4, 7)


def m(start, end):
    """Interval in minutes from the base time."""
    return Interval(base + timedelta(minutes=start), base + timedelta(minutes=end))


def minutes_of(intervals):
    return [(iv.start.minute, iv.end.minute) for iv in intervals]


def assert_canonical(intervals):
    for iv in intervals:
        assert iv.start < iv.end
    for a, b in zip(intervals, intervals[1:]):
        assert a.end < b.start


# one column per minute, o = O2
# minute:     0123456789012345678901234567
# available:   AAA     CCCC DD   EEEEEEE
#                BBBB              FFFF
# blocked:      SSS LL  M NNNNN   oooo   P
#                            OOO   QQ
available = [m(1, 4), m(3, 7), m(9, 13), m(14, 16), m(19, 26), m(21, 25)]
blocked = [m(2, 5), m(6, 8), m(10, 11), m(12, 17), m(15, 18), m(20, 24), m(21, 23), m(27, 28)]


def test_subtract():
    results = subtract_blocked(available, blocked)
    assert minutes_of(results) == [(1, 2), (5, 6), (9, 10), (11, 12), (19, 20), (24, 26)]
    assert_canonical(results)


def test_subtract_no_available():
    assert subtract_blocked([], [m(1, 2)]) == []


def test_subtract_completely_overlapping_single():
    assert subtract_blocked([m(1, 2)], [m(1, 2)]) == []


def test_subtract_completely_overlapping_multiple():
    assert subtract_blocked([m(1, 2), m(5, 7)], [m(5, 7), m(1, 2)]) == []


def test_subtract_merges_available_1():
    results = subtract_blocked([m(6, 7), m(2, 4), m(1, 3), m(5, 8)], [])
    assert results == [m(1, 4), m(5, 8)]


def test_subtract_merges_available_2():
    results = subtract_blocked([m(6, 7), m(10, 12), m(2, 4), m(5, 15), m(1, 3)], [])
    assert results == [m(1, 4), m(5, 15)]


def test_subtract_block_inside_splits():
    assert subtract_blocked([m(1, 10)], [m(4, 6)]) == [m(1, 4), m(6, 10)]


def test_subtract_block_covers():
    assert subtract_blocked([m(3, 5), m(8, 9)], [m(2, 6)]) == [m(8, 9)]


def test_touching_available_fuse():
    assert subtract_blocked([m(1, 3), m(3, 5)], []) == [m(1, 5)]
    assert subtract_blocked([m(3, 5), m(1, 3)], [m(7, 8)]) == [m(1, 5)]


def test_touching_blocked_keep_gap_closed():
    # blocks touching at 5 leave nothing in between
    assert subtract_blocked([m(1, 10)], [m(3, 5), m(5, 7)]) == [m(1, 3), m(7, 10)]


def test_available_ending_where_block_starts():
    assert subtract_blocked([m(1, 4)], [m(4, 6)]) == [m(1, 4)]
    assert subtract_blocked([m(4, 6)], [m(1, 4)]) == [m(4, 6)]


def test_zero_length_inputs():
    assert subtract_blocked([m(3, 3)], []) == []
    assert subtract_blocked([m(1, 5), m(5, 5)], []) == [m(1, 5)]
    assert subtract_blocked([m(1, 5)], [m(3, 3)]) == [m(1, 5)]
    assert subtract_blocked([m(1, 5)], [m(1, 1), m(5, 5)]) == [m(1, 5)]


def test_duplicates():
    assert subtract_blocked([m(1, 5), m(1, 5)], [m(2, 3), m(2, 3)]) == [m(1, 2), m(3, 5)]


def test_permutation_invariant():
    expected = subtract_blocked(available, blocked)
    for perm in itertools.islice(itertools.permutations(available), 0, 720, 37):
        assert subtract_blocked(list(perm), list(reversed(blocked))) == expected


def test_point_membership():
    results = subtract_blocked(available, blocked)
    for half_minutes in range(0, 60):
        t = base + timedelta(seconds=30 * half_minutes)
        expected = any(a.contains(t) for a in available) and not any(b.contains(t) for b in blocked)
        assert any(r.contains(t) for r in results) == expected, t


def test_merge_matches_subtract_with_no_blocks():
    assert merge_non_overlapping(available) == subtract_blocked(available, [])


def test_merge_idempotent():
    merged = merge_non_overlapping(available + blocked)
    assert merge_non_overlapping(merged) == merged
    assert_canonical(merged)


def test_merge_intervals_drops_invalid():
    assert merge_intervals([m(5, 2), m(1, 3), m(3, 4), m(6, 6)]) == [m(1, 4)]


def test_endpoint_order():
    heap = build_endpoints([m(1, 3)], [m(3, 4)])
    assert len(heap) == 4
    popped = [heapq.heappop(heap) for _ in range(4)]
    assert [e.time for e in popped] == [m(1, 1).start, m(3, 3).start, m(3, 3).start, m(4, 4).start]
    # at minute 3 the blocked open comes before the available close
    assert popped[1].side == EndpointSide.OPEN and popped[1].kind == IntervalKind.BLOCKED
    assert popped[2].side == EndpointSide.CLOSE and popped[2].kind == IntervalKind.AVAILABLE


def test_interval_helpers():
    iv = m(1, 4)
    assert iv.is_valid() and not iv.is_empty()
    assert iv.duration == timedelta(minutes=3)
    assert iv.minutes == 3.0
    assert iv.contains(iv.start) and not iv.contains(iv.end)
    assert iv.clip(m(2, 2).start, m(10, 10).start) == m(2, 4)
    assert iv.clip(m(4, 4).start, m(10, 10).start) is None
    assert str(iv).endswith("[3.000000 minutes]")
