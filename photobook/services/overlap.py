from __future__ import annotations

from abc import ABC, abstractmethod
from bisect import bisect_left
from datetime import date
from itertools import accumulate

from ..config import Settings
from ..core.timeutils import to_minutes
from ..db.repository import BookingRepository


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open ``[start, end)`` intersection test."""
    return start_a < end_b and end_a > start_b


class OverlapChecker(ABC):
    """Decides whether a photographer is already busy during a time range.

    Candidates are the photographer's active bookings on the same calendar
    date. Bookings are assumed not to cross midnight. Callers must pass
    ``start_time < end_time``.
    """

    def __init__(self, repository: BookingRepository) -> None:
        self.repository = repository

    def has_overlap(
        self,
        photographer_id: int | None,
        event_date: date,
        start_time: str,
        end_time: str,
        exclude_booking_id: int | None = None,
    ) -> bool:
        if photographer_id is None:
            return False
        start = to_minutes(start_time)
        end = to_minutes(end_time)
        candidates = self.repository.find_active_by_photographer_and_day(
            photographer_id, event_date, exclude_booking_id=exclude_booking_id
        )
        intervals = [
            (to_minutes(booking.start_time), to_minutes(booking.end_time))
            for booking in candidates
        ]
        return self.intersects_any(intervals, start, end)

    @abstractmethod
    def intersects_any(self, intervals: list[tuple[int, int]], start: int, end: int) -> bool:
        raise NotImplementedError


class LinearScanChecker(OverlapChecker):
    def intersects_any(self, intervals: list[tuple[int, int]], start: int, end: int) -> bool:
        for other_start, other_end in intervals:
            if intervals_overlap(start, end, other_start, other_end):
                return True
        return False


class SortedSweepChecker(OverlapChecker):
    """Sorts the day by start time and only inspects intervals starting before ``end``.

    The running maximum of end times keeps the answer correct even when the
    stored day already contains overlapping bookings.
    """

    def intersects_any(self, intervals: list[tuple[int, int]], start: int, end: int) -> bool:
        if not intervals:
            return False
        ordered = sorted(intervals)
        starts = [interval_start for interval_start, _ in ordered]
        max_ends = list(accumulate((interval_end for _, interval_end in ordered), max))
        idx = bisect_left(starts, end)
        return idx > 0 and max_ends[idx - 1] > start


def get_overlap_checker(repository: BookingRepository, settings: Settings) -> OverlapChecker:
    if settings.overlap_strategy == "scan":
        return LinearScanChecker(repository)
    if settings.overlap_strategy == "sweep":
        return SortedSweepChecker(repository)
    raise ValueError(f"Unsupported overlap strategy {settings.overlap_strategy}")
