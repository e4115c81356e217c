import logging
from datetime import date
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..config import get_settings
from ..core import constants
from ..core.auth import Actor, SYSTEM_ACTOR
from ..core.errors import (
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
    SchedulingConflictError,
    ValidationError,
)
from ..core.timeutils import time_range, today
from ..db import models, schemas
from ..db.repository import BookingRepository
from . import availability_service, lifecycle
from .overlap import OverlapChecker, get_overlap_checker

logger = logging.getLogger(__name__)

SCHEDULE_STATUSES = (models.BookingStatus.pending, models.BookingStatus.confirmed)
REQUIRED_FIELDS = ("event_date", "start_time", "end_time", "event_type", "package")


def _checker(repository: BookingRepository) -> OverlapChecker:
    return get_overlap_checker(repository, get_settings())


def _audit(db: Session, actor: Actor, action: str, booking: models.Booking, **payload: Any) -> None:
    db.add(
        models.AuditLog(
            actor_type=actor.role,
            actor_id=actor.id,
            action=action,
            payload={"booking_id": booking.id, **payload},
        )
    )


def _validate_schedule(event_date: date, start_time: str, end_time: str) -> None:
    time_range(start_time, end_time)
    if event_date < today():
        raise ValidationError("Event date cannot be in the past")


def _get_user(db: Session, user_id: int, role: models.UserRole) -> models.User:
    user = db.get(models.User, user_id)
    if not user or user.role != role or not user.is_active:
        raise NotFoundError(f"{role.value.capitalize()} not found")
    return user


def _ensure_day_open(db: Session, photographer_id: int | None, event_date: date) -> None:
    if photographer_id is not None and not availability_service.is_day_open(
        db, photographer_id, event_date
    ):
        raise SchedulingConflictError("The photographer is not available on this date.")


def get_booking(db: Session, booking_id: int, actor: Actor) -> models.Booking:
    booking = BookingRepository(db).get(booking_id)
    if not booking or not lifecycle.can_access(booking, actor):
        raise NotFoundError("Booking not found")
    return booking


def list_bookings(
    db: Session, actor: Actor, status: models.BookingStatus | None = None
) -> list[models.Booking]:
    stmt = select(models.Booking).options(selectinload(models.Booking.photographer))
    if actor.role == models.ActorType.client:
        stmt = stmt.where(models.Booking.client_id == actor.id)
    elif actor.role == models.ActorType.photographer:
        stmt = stmt.where(models.Booking.photographer_id == actor.id)
    if status:
        stmt = stmt.where(models.Booking.status == status)
    stmt = stmt.order_by(models.Booking.created_at.desc(), models.Booking.id.desc())
    return list(db.execute(stmt).scalars().all())


def create_booking(db: Session, actor: Actor, payload: schemas.BookingCreate) -> models.Booking:
    if actor.role == models.ActorType.client:
        client_id = actor.id
    elif actor.is_admin:
        if payload.client_id is None:
            raise ValidationError("client_id is required when booking on behalf of a client")
        client_id = _get_user(db, payload.client_id, models.UserRole.client).id
    else:
        raise ForbiddenError("Only clients can request bookings")

    _validate_schedule(payload.event_date, payload.start_time, payload.end_time)
    if payload.photographer_id is not None:
        _get_user(db, payload.photographer_id, models.UserRole.photographer)
        _ensure_day_open(db, payload.photographer_id, payload.event_date)

    repository = BookingRepository(db)
    checker = _checker(repository)
    if checker.has_overlap(
        payload.photographer_id, payload.event_date, payload.start_time, payload.end_time
    ):
        raise SchedulingConflictError()

    booking = models.Booking(
        client_id=client_id,
        status=models.BookingStatus.pending,
        payment_status=models.PaymentStatus.unpaid,
        **payload.model_dump(exclude={"client_id"}),
    )
    repository.create_if_no_conflict(booking, checker)
    _audit(db, actor, constants.BOOKING_CREATED, booking, photographer_id=booking.photographer_id)
    db.commit()
    db.refresh(booking)
    logger.info(
        "Booking created",
        extra={"booking_id": booking.id, "photographer_id": booking.photographer_id},
    )
    return booking


def update_booking(
    db: Session, booking_id: int, actor: Actor, payload: schemas.BookingUpdate
) -> models.Booking:
    booking = get_booking(db, booking_id, actor)
    expected: dict[str, Any] = {"status": booking.status}
    if actor.role == models.ActorType.client:
        if booking.status != models.BookingStatus.pending:
            raise InvalidTransitionError("Only pending bookings can be changed")
        expected["client_id"] = actor.id
    elif actor.is_admin:
        if booking.status in models.TERMINAL_STATUSES:
            raise InvalidTransitionError(f"Booking is already {booking.status.value}")
    else:
        raise ForbiddenError("Photographers cannot change booking details")

    changes = payload.model_dump(exclude_unset=True)
    for field in REQUIRED_FIELDS:
        if field in changes and changes[field] is None:
            raise ValidationError(f"{field} cannot be empty")
    if not changes:
        return booking

    event_date = changes.get("event_date", booking.event_date)
    start_time = changes.get("start_time", booking.start_time)
    end_time = changes.get("end_time", booking.end_time)
    temporal_changed = any(
        field in changes for field in ("event_date", "start_time", "end_time")
    )

    repository = BookingRepository(db)
    checker = None
    if temporal_changed:
        _validate_schedule(event_date, start_time, end_time)
        if "event_date" in changes:
            _ensure_day_open(db, booking.photographer_id, event_date)
        checker = _checker(repository)
        if checker.has_overlap(
            booking.photographer_id,
            event_date,
            start_time,
            end_time,
            exclude_booking_id=booking.id,
        ):
            raise SchedulingConflictError()

    repository.conditional_update(booking, changes, checker=checker, **expected)
    _audit(db, actor, constants.BOOKING_UPDATED, booking, fields=sorted(changes))
    db.commit()
    logger.info("Booking updated", extra={"booking_id": booking.id, "fields": sorted(changes)})
    return booking


def assign_photographer(
    db: Session, booking_id: int, actor: Actor, photographer_id: int
) -> models.Booking:
    if not actor.is_admin:
        raise ForbiddenError("Only admins can assign photographers")
    repository = BookingRepository(db)
    booking = repository.get(booking_id)
    if not booking:
        raise NotFoundError("Booking not found")
    if booking.status in models.TERMINAL_STATUSES:
        raise InvalidTransitionError(f"Booking is already {booking.status.value}")
    _get_user(db, photographer_id, models.UserRole.photographer)
    if booking.photographer_id == photographer_id:
        return booking
    _ensure_day_open(db, photographer_id, booking.event_date)

    previous_photographer_id = booking.photographer_id
    changes: dict[str, Any] = {"photographer_id": photographer_id}

    checker = _checker(repository)
    if checker.has_overlap(
        photographer_id,
        booking.event_date,
        booking.start_time,
        booking.end_time,
        exclude_booking_id=booking.id,
    ):
        raise SchedulingConflictError()

    repository.conditional_update(
        booking,
        changes,
        checker=checker,
        status=booking.status,
        photographer_id=previous_photographer_id,
    )
    _audit(
        db,
        actor,
        constants.BOOKING_ASSIGNED,
        booking,
        photographer_id=photographer_id,
        previous_photographer_id=previous_photographer_id,
    )
    db.commit()
    logger.info(
        "Photographer assigned",
        extra={
            "booking_id": booking.id,
            "photographer_id": photographer_id,
            "previous_photographer_id": previous_photographer_id,
        },
    )
    return booking


def transition_status(
    db: Session, booking_id: int, actor: Actor, target: models.BookingStatus
) -> models.Booking:
    repository = BookingRepository(db)
    booking = repository.get(booking_id)
    if not booking:
        raise NotFoundError("Booking not found")
    previous = booking.status
    changes = lifecycle.plan_transition(booking, actor, target)
    repository.conditional_update(
        booking, changes, status=previous, photographer_id=booking.photographer_id
    )
    _audit(
        db,
        actor,
        constants.BOOKING_STATUS_CHANGED,
        booking,
        previous=previous.value,
        current=target.value,
    )
    db.commit()
    logger.info(
        "Booking status changed",
        extra={"booking_id": booking.id, "previous": previous.value, "current": target.value},
    )
    return booking


def mark_paid(db: Session, booking_id: int, *, confirm: bool = False) -> models.Booking:
    repository = BookingRepository(db)
    booking = repository.get(booking_id)
    if not booking:
        raise NotFoundError("Booking not found")
    previous = booking.status
    changes: dict[str, Any] = {"payment_status": models.PaymentStatus.paid}
    if (
        confirm
        and previous == models.BookingStatus.pending
        and booking.photographer_id is not None
    ):
        changes.update(
            lifecycle.plan_transition(booking, SYSTEM_ACTOR, models.BookingStatus.confirmed)
        )
    repository.conditional_update(booking, changes, status=previous)
    _audit(db, SYSTEM_ACTOR, constants.BOOKING_PAID, booking, status=booking.status.value)
    db.commit()
    logger.info(
        "Booking marked as paid",
        extra={"booking_id": booking.id, "status": booking.status.value},
    )
    return booking


def photographer_schedule(db: Session, photographer_id: int, actor: Actor) -> list[models.Booking]:
    if not actor.is_admin and not (
        actor.role == models.ActorType.photographer and actor.id == photographer_id
    ):
        raise ForbiddenError("Cannot view another photographer's schedule")
    stmt = (
        select(models.Booking)
        .options(selectinload(models.Booking.client))
        .where(
            models.Booking.photographer_id == photographer_id,
            models.Booking.status.in_(SCHEDULE_STATUSES),
        )
        .order_by(models.Booking.event_date, models.Booking.start_time)
    )
    return list(db.execute(stmt).scalars().all())


def check_availability(
    db: Session, photographer_id: int, event_date: date, start_time: str, end_time: str
) -> bool:
    _get_user(db, photographer_id, models.UserRole.photographer)
    _validate_schedule(event_date, start_time, end_time)
    if not availability_service.is_day_open(db, photographer_id, event_date):
        return False
    checker = _checker(BookingRepository(db))
    return not checker.has_overlap(photographer_id, event_date, start_time, end_time)
