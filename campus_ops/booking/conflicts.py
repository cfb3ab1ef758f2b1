# campus_ops/booking/conflicts.py
# Half-open [start, end) intervals. Callers pass bookings already narrowed to one
# facility, one date and the active statuses, and reject start >= end beforehand.
from datetime import time
from typing import Iterable

from campus_ops.booking.models import Booking


def overlaps(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    """True iff ``[start_a, end_a)`` and ``[start_b, end_b)`` share an instant."""
    return start_a < end_b and start_b < end_a


def find_conflict(
    start: time,
    end: time,
    existing: Iterable[Booking],
    exclude_id: int | None = None,
) -> Booking | None:
    """Return the first booking in ``existing`` overlapping the candidate, if any.

    ``exclude_id`` skips the booking being re-validated against itself.
    """
    for booking in existing:
        if exclude_id is not None and booking.id == exclude_id:
            continue
        if overlaps(start, end, booking.start_time, booking.end_time):
            return booking
    return None


def has_conflict(
    start: time,
    end: time,
    existing: Iterable[Booking],
    exclude_id: int | None = None,
) -> bool:
    return find_conflict(start, end, existing, exclude_id) is not None
