"""Booking status state machine.

``TRANSITIONS`` lists every permitted ``(from, to)`` pair with the roles that
may perform it. Clients may only act on their own bookings and photographers
only on bookings assigned to them; admins and the payment system act on any.
"""

from typing import Any

from ..core.auth import Actor
from ..core.errors import ForbiddenError, InvalidTransitionError, NotFoundError
from ..db.models import ActorType, Booking, BookingStatus, TERMINAL_STATUSES

CLIENT = ActorType.client
PHOTOGRAPHER = ActorType.photographer
ADMIN = ActorType.admin
SYSTEM = ActorType.system

TRANSITIONS: dict[tuple[BookingStatus, BookingStatus], frozenset[ActorType]] = {
    (BookingStatus.pending, BookingStatus.confirmed): frozenset({PHOTOGRAPHER, ADMIN, SYSTEM}),
    (BookingStatus.pending, BookingStatus.declined): frozenset({PHOTOGRAPHER, ADMIN}),
    (BookingStatus.pending, BookingStatus.cancelled): frozenset({CLIENT, PHOTOGRAPHER, ADMIN}),
    (BookingStatus.confirmed, BookingStatus.in_progress): frozenset({PHOTOGRAPHER, ADMIN}),
    (BookingStatus.confirmed, BookingStatus.completed): frozenset({PHOTOGRAPHER, ADMIN}),
    (BookingStatus.confirmed, BookingStatus.cancelled): frozenset({CLIENT, ADMIN}),
    (BookingStatus.in_progress, BookingStatus.completed): frozenset({PHOTOGRAPHER, ADMIN}),
    (BookingStatus.in_progress, BookingStatus.cancelled): frozenset({ADMIN}),
}

# Only these moves are possible before a photographer is assigned
UNASSIGNED_TARGETS = frozenset({BookingStatus.cancelled, BookingStatus.declined})


def can_access(booking: Booking, actor: Actor) -> bool:
    if actor.role == CLIENT:
        return booking.client_id == actor.id
    if actor.role == PHOTOGRAPHER:
        return booking.photographer_id is not None and booking.photographer_id == actor.id
    return actor.role in (ADMIN, SYSTEM)


def allowed_targets(current: BookingStatus, actor: Actor) -> list[BookingStatus]:
    return [
        target
        for (source, target), roles in TRANSITIONS.items()
        if source == current and actor.role in roles
    ]


def plan_transition(booking: Booking, actor: Actor, target: BookingStatus) -> dict[str, Any]:
    """Validate a status change and return the column changes it implies."""
    if not can_access(booking, actor):
        raise NotFoundError("Booking not found")
    current = booking.status
    if current in TERMINAL_STATUSES:
        raise InvalidTransitionError(f"Booking is already {current.value}")
    if target == current:
        raise InvalidTransitionError(f"Booking is already {current.value}")
    roles = TRANSITIONS.get((current, target))
    if roles is None:
        raise InvalidTransitionError(
            f"Cannot move booking from {current.value} to {target.value}"
        )
    if booking.photographer_id is None and target not in UNASSIGNED_TARGETS:
        raise InvalidTransitionError(
            f"Cannot move booking to {target.value} without an assigned photographer"
        )
    if actor.role not in roles:
        raise ForbiddenError(
            f"{actor.role.value} cannot move booking from {current.value} to {target.value}"
        )

    changes: dict[str, Any] = {"status": target}
    # A declining photographer is released; the booking itself stays closed
    if target == BookingStatus.declined and actor.role == PHOTOGRAPHER:
        changes["photographer_id"] = None
    return changes
