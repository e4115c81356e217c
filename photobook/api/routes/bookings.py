from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from ...api import deps
from ...core.auth import Actor
from ...core.errors import SchedulingError
from ...db.session import get_db
from ...db import models, schemas
from ...services import booking_service, lifecycle

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("", response_model=list[schemas.Booking])
def list_bookings(
    status_filter: models.BookingStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    actor: Actor = Depends(deps.get_current_actor),
):
    return booking_service.list_bookings(db, actor, status_filter)


@router.post("", response_model=schemas.Booking, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: schemas.BookingCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(deps.require_roles("client", "admin")),
):
    try:
        return booking_service.create_booking(db, actor, payload)
    except SchedulingError as exc:
        raise deps.http_error(exc) from exc


@router.get("/{booking_id}", response_model=schemas.Booking)
def get_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(deps.get_current_actor),
):
    try:
        return booking_service.get_booking(db, booking_id, actor)
    except SchedulingError as exc:
        raise deps.http_error(exc) from exc


@router.patch("/{booking_id}", response_model=schemas.Booking)
def update_booking(
    booking_id: int,
    payload: schemas.BookingUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(deps.require_roles("client", "admin")),
):
    try:
        return booking_service.update_booking(db, booking_id, actor, payload)
    except SchedulingError as exc:
        raise deps.http_error(exc) from exc


@router.post("/{booking_id}/assign", response_model=schemas.Booking)
def assign_photographer(
    booking_id: int,
    payload: schemas.BookingAssign,
    db: Session = Depends(get_db),
    actor: Actor = Depends(deps.require_roles("admin")),
):
    try:
        return booking_service.assign_photographer(db, booking_id, actor, payload.photographer_id)
    except SchedulingError as exc:
        raise deps.http_error(exc) from exc


@router.post("/{booking_id}/status", response_model=schemas.Booking)
def change_status(
    booking_id: int,
    payload: schemas.BookingStatusUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(deps.get_current_actor),
):
    try:
        return booking_service.transition_status(db, booking_id, actor, payload.status)
    except SchedulingError as exc:
        raise deps.http_error(exc) from exc


@router.get("/{booking_id}/transitions", response_model=schemas.BookingTransitions)
def list_transitions(
    booking_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(deps.get_current_actor),
):
    try:
        booking = booking_service.get_booking(db, booking_id, actor)
    except SchedulingError as exc:
        raise deps.http_error(exc) from exc
    return schemas.BookingTransitions(
        booking_id=booking.id,
        status=booking.status,
        allowed=lifecycle.allowed_targets(booking.status, actor),
    )
