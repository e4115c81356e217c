from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ...api import deps
from ...core.auth import Actor
from ...core.errors import SchedulingError
from ...db.session import get_db
from ...db import schemas
from ...services import availability_service, booking_service

router = APIRouter(prefix="/photographers", tags=["photographers"])


@router.get("/{photographer_id}/schedule", response_model=list[schemas.Booking])
def photographer_schedule(
    photographer_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(deps.require_roles("photographer", "admin")),
):
    try:
        return booking_service.photographer_schedule(db, photographer_id, actor)
    except SchedulingError as exc:
        raise deps.http_error(exc) from exc


@router.get("/{photographer_id}/availability", response_model=schemas.Availability)
def photographer_availability(
    photographer_id: int,
    event_date: date,
    start_time: str,
    end_time: str,
    db: Session = Depends(get_db),
    _: Actor = Depends(deps.get_current_actor),
):
    try:
        available = booking_service.check_availability(
            db, photographer_id, event_date, start_time, end_time
        )
    except SchedulingError as exc:
        raise deps.http_error(exc) from exc
    return schemas.Availability(
        photographer_id=photographer_id,
        event_date=event_date,
        start_time=start_time,
        end_time=end_time,
        available=available,
    )


@router.put("/me/availability", response_model=schemas.DayAvailability)
def set_my_availability(
    payload: schemas.DayAvailabilityUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(deps.require_roles("photographer")),
):
    try:
        return availability_service.set_day(db, actor, payload.event_date, payload.is_available)
    except SchedulingError as exc:
        raise deps.http_error(exc) from exc


@router.get("/{photographer_id}/availability/days", response_model=list[schemas.DayAvailability])
def photographer_days(
    photographer_id: int,
    start: date | None = None,
    db: Session = Depends(get_db),
    _: Actor = Depends(deps.get_current_actor),
):
    try:
        return availability_service.list_days(db, photographer_id, start=start)
    except SchedulingError as exc:
        raise deps.http_error(exc) from exc
