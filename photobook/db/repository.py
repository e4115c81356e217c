from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any, Iterable

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from ..core.errors import InvalidTransitionError, SchedulingConflictError
from .models import ACTIVE_STATUSES, Booking, BookingStatus, User

if TYPE_CHECKING:
    from ..services.overlap import OverlapChecker


TEMPORAL_FIELDS = ("photographer_id", "event_date", "start_time", "end_time")


class BookingRepository:
    """Persistence operations the scheduling services rely on.

    The guarded writes (``create_if_no_conflict`` and ``conditional_update``)
    lock the photographer row and re-run the overlap check inside the current
    transaction. The caller commits; on any rejection the transaction is
    rolled back before the error propagates.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, booking_id: int) -> Booking | None:
        return self.db.get(Booking, booking_id)

    def find_active_by_photographer_and_day(
        self,
        photographer_id: int,
        event_date: date,
        *,
        exclude_booking_id: int | None = None,
    ) -> list[Booking]:
        stmt = select(Booking).where(
            Booking.photographer_id == photographer_id,
            Booking.event_date == event_date,
            Booking.status.in_(list(ACTIVE_STATUSES)),
        )
        if exclude_booking_id is not None:
            stmt = stmt.where(Booking.id != exclude_booking_id)
        return list(self.db.execute(stmt).scalars().all())

    def list_assigned(self, statuses: Iterable[BookingStatus]) -> list[Booking]:
        stmt = (
            select(Booking)
            .options(selectinload(Booking.client), selectinload(Booking.photographer))
            .where(
                Booking.photographer_id.is_not(None),
                Booking.status.in_(list(statuses)),
            )
            .order_by(Booking.event_date, Booking.start_time)
        )
        return list(self.db.execute(stmt).scalars().all())

    def lock_photographer(self, photographer_id: int) -> None:
        # Serializes concurrent writers for one photographer until commit
        self.db.execute(
            select(User.id).where(User.id == photographer_id).with_for_update()
        ).first()

    def _guard(
        self,
        checker: OverlapChecker,
        values: dict[str, Any],
        exclude_booking_id: int | None = None,
    ) -> None:
        photographer_id = values["photographer_id"]
        if photographer_id is None:
            return
        self.lock_photographer(photographer_id)
        if checker.has_overlap(
            photographer_id,
            values["event_date"],
            values["start_time"],
            values["end_time"],
            exclude_booking_id=exclude_booking_id,
        ):
            self.db.rollback()
            raise SchedulingConflictError()

    def create_if_no_conflict(self, booking: Booking, checker: OverlapChecker) -> Booking:
        values = {field: getattr(booking, field) for field in TEMPORAL_FIELDS}
        self._guard(checker, values)
        self.db.add(booking)
        self.db.flush()
        return booking

    def conditional_update(
        self,
        booking: Booking,
        changes: dict[str, Any],
        *,
        checker: OverlapChecker | None = None,
        **expected: Any,
    ) -> Booking:
        """Apply ``changes`` only while the stored row still matches ``expected``.

        ``expected`` maps column names to the values the caller based its
        decision on, typically ``status`` and an ownership column.
        """
        if checker is not None:
            values = {field: changes.get(field, getattr(booking, field)) for field in TEMPORAL_FIELDS}
            self._guard(checker, values, exclude_booking_id=booking.id)

        stmt = update(Booking).where(Booking.id == booking.id)
        for column_name, value in expected.items():
            column = getattr(Booking, column_name)
            stmt = stmt.where(column.is_(None) if value is None else column == value)
        stmt = stmt.values(**changes).execution_options(synchronize_session=False)

        result = self.db.execute(stmt)
        if result.rowcount == 0:
            self.db.rollback()
            raise InvalidTransitionError("Booking was modified by another request")
        self.db.refresh(booking)
        return booking
