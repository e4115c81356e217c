import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core import constants
from ..core.auth import Actor
from ..core.errors import ForbiddenError, NotFoundError, ValidationError
from ..core.timeutils import today
from ..db import models

logger = logging.getLogger(__name__)


def get_day(db: Session, photographer_id: int, event_date: date) -> models.DayAvailability | None:
    stmt = select(models.DayAvailability).where(
        models.DayAvailability.photographer_id == photographer_id,
        models.DayAvailability.event_date == event_date,
    )
    return db.execute(stmt).scalar_one_or_none()


def is_day_open(db: Session, photographer_id: int, event_date: date) -> bool:
    day = get_day(db, photographer_id, event_date)
    return day is None or day.is_available


def list_days(
    db: Session, photographer_id: int, *, start: date | None = None
) -> list[models.DayAvailability]:
    photographer = db.get(models.User, photographer_id)
    if not photographer or photographer.role != models.UserRole.photographer:
        raise NotFoundError("Photographer not found")
    stmt = select(models.DayAvailability).where(
        models.DayAvailability.photographer_id == photographer_id
    )
    if start is not None:
        stmt = stmt.where(models.DayAvailability.event_date >= start)
    stmt = stmt.order_by(models.DayAvailability.event_date)
    return list(db.execute(stmt).scalars().all())


def set_day(
    db: Session, actor: Actor, event_date: date, is_available: bool
) -> models.DayAvailability:
    """Open or close one calendar day for the calling photographer.

    Existing bookings on a closed day are kept; only new bookings and
    assignments are refused.
    """
    if actor.role != models.ActorType.photographer:
        raise ForbiddenError("Only photographers can set availability")
    if event_date < today():
        raise ValidationError("Event date cannot be in the past")

    day = get_day(db, actor.id, event_date)
    if day is None:
        day = models.DayAvailability(photographer_id=actor.id, event_date=event_date)
        db.add(day)
    day.is_available = is_available
    db.add(
        models.AuditLog(
            actor_type=actor.role,
            actor_id=actor.id,
            action=constants.AVAILABILITY_SET,
            payload={"event_date": event_date.isoformat(), "is_available": is_available},
        )
    )
    db.commit()
    db.refresh(day)
    logger.info(
        "Photographer availability set",
        extra={
            "photographer_id": actor.id,
            "event_date": event_date.isoformat(),
            "is_available": is_available,
        },
    )
    return day
