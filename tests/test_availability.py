from datetime import date

import pytest

from conftest import EVENT_DAY, create_booking, create_user
from photobook.core.auth import Actor
from photobook.core.errors import (
    ForbiddenError,
    NotFoundError,
    SchedulingConflictError,
    ValidationError,
)
from photobook.db import models, schemas
from photobook.services import availability_service, booking_service


@pytest.fixture()
def people(db_session):
    client = create_user(db_session, "Asha")
    photographer = create_user(db_session, "Ravi", role=models.UserRole.photographer)
    admin = create_user(db_session, "Root", role=models.UserRole.admin)
    return client, photographer, admin


def actor_for(user):
    return Actor(id=user.id, role=models.ActorType(user.role.value))


def close_day(db_session, photographer, event_date=EVENT_DAY):
    return availability_service.set_day(db_session, actor_for(photographer), event_date, False)


def test_set_day_upserts_single_row(db_session, people):
    _, photographer, _ = people
    closed = close_day(db_session, photographer)
    assert closed.is_available is False
    assert not availability_service.is_day_open(db_session, photographer.id, EVENT_DAY)

    reopened = availability_service.set_day(db_session, actor_for(photographer), EVENT_DAY, True)
    assert reopened.id == closed.id
    assert availability_service.is_day_open(db_session, photographer.id, EVENT_DAY)
    assert db_session.query(models.DayAvailability).count() == 1
    actions = [log.action for log in db_session.query(models.AuditLog)]
    assert actions == ["availability_set", "availability_set"]


def test_days_without_a_row_are_open(db_session, people):
    _, photographer, _ = people
    assert availability_service.is_day_open(db_session, photographer.id, date(2024, 7, 1))


def test_set_day_rules(db_session, people):
    client, photographer, admin = people
    with pytest.raises(ForbiddenError):
        availability_service.set_day(db_session, actor_for(client), EVENT_DAY, False)
    with pytest.raises(ForbiddenError):
        availability_service.set_day(db_session, actor_for(admin), EVENT_DAY, False)
    with pytest.raises(ValidationError):
        availability_service.set_day(db_session, actor_for(photographer), date(2024, 4, 1), False)


def test_list_days(db_session, people):
    client, photographer, _ = people
    close_day(db_session, photographer, date(2024, 6, 10))
    close_day(db_session, photographer, EVENT_DAY)
    days = availability_service.list_days(db_session, photographer.id)
    assert [day.event_date for day in days] == [EVENT_DAY, date(2024, 6, 10)]
    later = availability_service.list_days(db_session, photographer.id, start=date(2024, 6, 5))
    assert [day.event_date for day in later] == [date(2024, 6, 10)]
    with pytest.raises(NotFoundError):
        availability_service.list_days(db_session, client.id)


def test_closed_day_refuses_new_bookings(db_session, people):
    client, photographer, _ = people
    close_day(db_session, photographer)
    payload = schemas.BookingCreate(
        photographer_id=photographer.id,
        event_date=EVENT_DAY,
        start_time="10:00",
        end_time="12:00",
    )
    with pytest.raises(SchedulingConflictError):
        booking_service.create_booking(db_session, actor_for(client), payload)
    assert db_session.query(models.Booking).count() == 0

    unassigned = schemas.BookingCreate(
        event_date=EVENT_DAY, start_time="10:00", end_time="12:00"
    )
    assert booking_service.create_booking(db_session, actor_for(client), unassigned).id


def test_closed_day_refuses_assignment(db_session, people):
    client, photographer, admin = people
    booking = create_booking(db_session, client, None)
    close_day(db_session, photographer)
    with pytest.raises(SchedulingConflictError):
        booking_service.assign_photographer(
            db_session, booking.id, actor_for(admin), photographer.id
        )
    db_session.expire_all()
    assert db_session.get(models.Booking, booking.id).photographer_id is None


def test_closed_day_refuses_moving_booking_onto_it(db_session, people):
    client, photographer, _ = people
    booking = create_booking(db_session, client, photographer, event_date=date(2024, 6, 2))
    close_day(db_session, photographer)
    with pytest.raises(SchedulingConflictError):
        booking_service.update_booking(
            db_session, booking.id, actor_for(client), schemas.BookingUpdate(event_date=EVENT_DAY)
        )
    moved = booking_service.update_booking(
        db_session,
        booking.id,
        actor_for(client),
        schemas.BookingUpdate(event_date=date(2024, 6, 3)),
    )
    assert moved.event_date == date(2024, 6, 3)


def test_closed_day_reports_unavailable(db_session, people):
    _, photographer, _ = people
    assert booking_service.check_availability(db_session, photographer.id, EVENT_DAY, "10:00", "12:00")
    close_day(db_session, photographer)
    assert not booking_service.check_availability(
        db_session, photographer.id, EVENT_DAY, "10:00", "12:00"
    )
