from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from itertools import combinations

from sqlalchemy.orm import Session

from ..core.timeutils import to_minutes
from ..db import models
from ..db.repository import BookingRepository
from .overlap import intervals_overlap

# Only bookings still open for remediation are reported
REPORTED_STATUSES = (models.BookingStatus.pending, models.BookingStatus.confirmed)


@dataclass(slots=True)
class ConflictBooking:
    id: int
    client: str | None
    type: str | None
    time: str


@dataclass(slots=True)
class ConflictRecord:
    photographer_id: int
    photographer: str | None
    event_date: date
    booking_a: ConflictBooking
    booking_b: ConflictBooking
    overlaps: bool


def _describe(booking: models.Booking) -> ConflictBooking:
    return ConflictBooking(
        id=booking.id,
        client=booking.client.name if booking.client else None,
        type=booking.event_type,
        time=f"{booking.start_time} - {booking.end_time}",
    )


def list_conflicts(db: Session) -> list[ConflictRecord]:
    """Pair up assigned pending/confirmed bookings sharing a photographer and a day.

    Every same-day pair is reported; ``overlaps`` tells whether the two time
    ranges actually intersect.
    """
    bookings = BookingRepository(db).list_assigned(REPORTED_STATUSES)

    groups: dict[tuple[int, date], list[models.Booking]] = defaultdict(list)
    for booking in bookings:
        groups[(booking.photographer_id, booking.event_date)].append(booking)

    conflicts: list[ConflictRecord] = []
    for (photographer_id, event_date), group in groups.items():
        for first, second in combinations(group, 2):
            conflicts.append(
                ConflictRecord(
                    photographer_id=photographer_id,
                    photographer=first.photographer.name if first.photographer else None,
                    event_date=event_date,
                    booking_a=_describe(first),
                    booking_b=_describe(second),
                    overlaps=intervals_overlap(
                        to_minutes(first.start_time),
                        to_minutes(first.end_time),
                        to_minutes(second.start_time),
                        to_minutes(second.end_time),
                    ),
                )
            )
    return conflicts
