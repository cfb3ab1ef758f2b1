# tests/test_conflicts.py
from datetime import time
from itertools import product

import pytest

from campus_ops.booking.conflicts import find_conflict, has_conflict, overlaps
from campus_ops.booking.models import Booking, BookingStatus


def _booking(id_, start, end, status=BookingStatus.PENDING):
    return Booking(id=id_, start_time=time(*start), end_time=time(*end), status=status)


@pytest.mark.parametrize(
    "candidate, existing, expected",
    [
        (((9, 0), (10, 0)), ((9, 0), (10, 0)), True),     # identical
        (((9, 30), (10, 30)), ((9, 0), (10, 0)), True),   # tail overlap
        (((8, 30), (9, 30)), ((9, 0), (10, 0)), True),    # head overlap
        (((9, 15), (9, 45)), ((9, 0), (10, 0)), True),    # contained
        (((8, 0), (11, 0)), ((9, 0), (10, 0)), True),     # containing
        (((10, 0), (11, 0)), ((9, 0), (10, 0)), False),   # touching after
        (((8, 0), (9, 0)), ((9, 0), (10, 0)), False),     # touching before
        (((11, 0), (12, 0)), ((9, 0), (10, 0)), False),   # disjoint
    ],
)
def test_has_conflict_cases(candidate, existing, expected):
    start, end = candidate
    assert has_conflict(time(*start), time(*end), [_booking(1, *existing)]) is expected


def test_overlap_matches_half_open_rule_on_hour_grid():
    hours = range(8, 13)
    for a1, a2, b1, b2 in product(hours, repeat=4):
        if a1 >= a2 or b1 >= b2:
            continue
        expected = a1 < b2 and b1 < a2
        assert overlaps(time(a1), time(a2), time(b1), time(b2)) is expected
        if a2 == b1 or b2 == a1:
            assert not expected


def test_find_conflict_reports_first_clash():
    existing = [
        _booking(1, (7, 0), (8, 0)),
        _booking(2, (9, 0), (10, 0), BookingStatus.APPROVED),
        _booking(3, (9, 30), (11, 0)),
    ]
    clash = find_conflict(time(9, 45), time(10, 15), existing)
    assert clash.id == 2
    assert clash.status == BookingStatus.APPROVED


def test_find_conflict_skips_excluded_booking():
    existing = [_booking(5, (9, 0), (10, 0))]
    assert find_conflict(time(9, 0), time(10, 0), existing, exclude_id=5) is None
    assert find_conflict(time(9, 0), time(10, 0), existing, exclude_id=6).id == 5


def test_no_existing_bookings_means_no_conflict():
    assert has_conflict(time(9, 0), time(10, 0), []) is False
