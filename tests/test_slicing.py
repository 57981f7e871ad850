from datetime import datetime, timedelta

from time_intervals.intervals import Interval
from time_intervals.slicing import split_into_fixed_intervals

base = datetime(2018, 4, 7)


def m(start, end):
    return Interval(base + timedelta(minutes=start), base + timedelta(minutes=end))


# 8am      9am     10am    11am    12am    1pm     2pm     3pm
# |        |       |       |       |       |       |       |
#    AAAAAAAAAAAAAAAAAAAAAAAAAAA  BBBBBBBB     CCCCCCCC
#    000011112222333344445555666  77778888     99990000
A = m(8 * 60 + 15, 11 * 60 + 43)
B = m(12 * 60, 13 * 60)
C = m(13 * 60 + 30, 14 * 60 + 40)


def test_split_in_fixed_intervals():
    r = split_into_fixed_intervals([A, B, C], 30)
    half_hour = timedelta(minutes=30)

    assert len(r) == 10
    for i in range(6):
        assert r[i] == Interval(A.start + i * half_hour, A.start + (i + 1) * half_hour)
    assert r[6] == Interval(B.start, B.start + half_hour)
    assert r[7] == Interval(B.start + half_hour, B.end)
    assert r[8] == Interval(C.start, C.start + half_hour)
    assert r[9] == Interval(C.start + half_hour, C.start + 2 * half_hour)


def test_slices_stay_inside_source():
    sources = [A, B, C]
    for width in (7, 25, 60):
        r = split_into_fixed_intervals(sources, width)
        for piece in r:
            assert piece.duration == timedelta(minutes=width)
            assert any(s.start <= piece.start and piece.end <= s.end for s in sources)
        expected = sum(int(s.minutes // width) for s in sources)
        assert len(r) == expected


def test_too_short_interval():
    assert split_into_fixed_intervals([m(0, 29)], 30) == []
    assert split_into_fixed_intervals([m(0, 30)], 30) == [m(0, 30)]


def test_non_positive_width():
    assert split_into_fixed_intervals([A], 0) == []
    assert split_into_fixed_intervals([A], -15) == []
