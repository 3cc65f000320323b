"""
Clock-time interval arithmetic.

All intervals are half-open `[start, end)` on a single calendar date, so two
intervals that only touch at an endpoint do not overlap.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterable, Iterator

from app.core.exceptions import InvalidRangeError

Interval = tuple[time, time]

_SECONDS_PER_HOUR = 3600.0


def duration_hours(day: date, start: time, end: time) -> float:
    """
    Hours between two clock times on the same date.

    Raises:
        InvalidRangeError: If end is not after start
    """
    if end <= start:
        raise InvalidRangeError(
            f"{day.isoformat()} {format_time(start)}-{format_time(end)}: end must be after start"
        )
    delta = datetime.combine(day, end) - datetime.combine(day, start)
    return delta.total_seconds() / _SECONDS_PER_HOUR


def intervals_overlap(a_start: time, a_end: time, b_start: time, b_end: time) -> bool:
    """True when the two half-open intervals share any positive span."""
    return not (a_end <= b_start or a_start >= b_end)


def available_slots(
    busy: Iterable[Interval],
    window_start: time,
    window_end: time,
) -> Iterator[Interval]:
    """
    Yield the free gaps of a working window in chronological order.

    Args:
        busy: Occupied intervals, breaks included, in any order
        window_start: Start of the working window
        window_end: End of the working window

    Yields:
        (start, end) pairs with start < end, clipped to the window
    """
    cursor = window_start
    for busy_start, busy_end in sorted(busy):
        gap_end = min(busy_start, window_end)
        if cursor < gap_end:
            yield cursor, gap_end
        if busy_end > cursor:
            cursor = busy_end
        if cursor >= window_end:
            return
    if cursor < window_end:
        yield cursor, window_end


def add_hours(day: date, start: time, hours: float) -> time:
    """Clock time `hours` after `start`; the result must stay on `day`."""
    end = datetime.combine(day, start) + timedelta(hours=hours)
    if end.date() != day:
        raise InvalidRangeError(f"{day.isoformat()} {format_time(start)} + {hours}h crosses midnight")
    return end.time()


def format_time(value: time) -> str:
    """HH:MM, with seconds only when they are set."""
    if value.second or value.microsecond:
        return value.strftime("%H:%M:%S")
    return value.strftime("%H:%M")
