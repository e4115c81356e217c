from datetime import date

import pytest

from conftest import EVENT_DAY, create_booking, create_user
from photobook.config import Settings
from photobook.core.errors import ValidationError
from photobook.core.timeutils import time_range, to_minutes
from photobook.db import models
from photobook.db.repository import BookingRepository
from photobook.services.overlap import (
    LinearScanChecker,
    SortedSweepChecker,
    get_overlap_checker,
    intervals_overlap,
)

CHECKERS = [LinearScanChecker, SortedSweepChecker]


@pytest.fixture()
def people(db_session):
    client = create_user(db_session, "Asha")
    photographer = create_user(db_session, "Ravi", role=models.UserRole.photographer)
    other = create_user(db_session, "Meera", role=models.UserRole.photographer)
    return client, photographer, other


def test_time_conversion():
    assert to_minutes("00:00") == 0
    assert to_minutes("09:05") == 545
    assert to_minutes("23:59") == 1439
    for bad in ("9:05", "24:00", "12:60", "1200", "", "ab:cd"):
        with pytest.raises(ValidationError):
            to_minutes(bad)


def test_time_range_requires_start_before_end():
    assert time_range("10:00", "14:00") == (600, 840)
    with pytest.raises(ValidationError):
        time_range("14:00", "14:00")
    with pytest.raises(ValidationError):
        time_range("15:00", "14:00")


def test_half_open_intervals():
    assert intervals_overlap(600, 840, 780, 960)
    assert not intervals_overlap(600, 840, 840, 960)
    assert not intervals_overlap(840, 960, 600, 840)
    assert intervals_overlap(600, 960, 700, 720)
    assert intervals_overlap(700, 720, 600, 960)


@pytest.mark.parametrize("checker_cls", CHECKERS)
def test_confirmed_booking_blocks_overlapping_request(db_session, people, checker_cls):
    client, photographer, other = people
    create_booking(
        db_session, client, photographer, "10:00", "14:00", status=models.BookingStatus.confirmed
    )
    checker = checker_cls(BookingRepository(db_session))

    assert checker.has_overlap(photographer.id, EVENT_DAY, "13:00", "16:00")
    assert not checker.has_overlap(photographer.id, EVENT_DAY, "14:00", "16:00")
    assert not checker.has_overlap(photographer.id, EVENT_DAY, "08:00", "10:00")
    assert checker.has_overlap(photographer.id, EVENT_DAY, "11:00", "12:00")
    assert not checker.has_overlap(other.id, EVENT_DAY, "13:00", "16:00")
    assert not checker.has_overlap(photographer.id, date(2024, 6, 2), "13:00", "16:00")


@pytest.mark.parametrize("checker_cls", CHECKERS)
def test_overlap_is_symmetric(db_session, people, checker_cls):
    client, photographer, _ = people
    ranges = [("09:00", "11:00"), ("10:30", "12:00"), ("11:00", "13:00"), ("07:00", "15:00")]
    for first in ranges:
        for second in ranges:
            db_session.query(models.Booking).delete()
            db_session.commit()
            create_booking(db_session, client, photographer, *first)
            forward = checker_cls(BookingRepository(db_session)).has_overlap(
                photographer.id, EVENT_DAY, *second
            )

            db_session.query(models.Booking).delete()
            db_session.commit()
            create_booking(db_session, client, photographer, *second)
            backward = checker_cls(BookingRepository(db_session)).has_overlap(
                photographer.id, EVENT_DAY, *first
            )
            assert forward == backward, (first, second)


@pytest.mark.parametrize("checker_cls", CHECKERS)
def test_excluding_own_booking(db_session, people, checker_cls):
    client, photographer, _ = people
    booking = create_booking(db_session, client, photographer, "10:00", "12:00")
    checker = checker_cls(BookingRepository(db_session))

    assert checker.has_overlap(photographer.id, EVENT_DAY, "11:00", "13:00")
    assert not checker.has_overlap(
        photographer.id, EVENT_DAY, "11:00", "13:00", exclude_booking_id=booking.id
    )


@pytest.mark.parametrize("checker_cls", CHECKERS)
def test_unassigned_and_inactive_bookings_never_conflict(db_session, people, checker_cls):
    client, photographer, _ = people
    create_booking(db_session, client, None, "10:00", "12:00")
    create_booking(
        db_session, client, photographer, "10:00", "12:00", status=models.BookingStatus.cancelled
    )
    create_booking(
        db_session, client, photographer, "10:00", "12:00", status=models.BookingStatus.declined
    )
    checker = checker_cls(BookingRepository(db_session))

    assert not checker.has_overlap(None, EVENT_DAY, "10:00", "12:00")
    assert not checker.has_overlap(photographer.id, EVENT_DAY, "10:00", "12:00")


@pytest.mark.parametrize(
    "status",
    [
        models.BookingStatus.pending,
        models.BookingStatus.confirmed,
        models.BookingStatus.in_progress,
        models.BookingStatus.completed,
    ],
)
def test_every_active_status_occupies_the_slot(db_session, people, status):
    client, photographer, _ = people
    create_booking(db_session, client, photographer, "10:00", "12:00", status=status)
    checker = LinearScanChecker(BookingRepository(db_session))
    assert checker.has_overlap(photographer.id, EVENT_DAY, "11:30", "12:30")


def test_sweep_checker_handles_already_overlapping_day():
    checker = SortedSweepChecker(repository=None)
    # 08:00-18:00 encloses the request while the latest-starting interval ends before it
    intervals = [(480, 1080), (540, 600), (620, 660)]
    assert checker.intersects_any(intervals, 900, 960)
    assert not checker.intersects_any([(540, 600), (620, 660)], 660, 720)
    assert not checker.intersects_any([], 0, 60)


def test_get_overlap_checker_strategy():
    assert isinstance(get_overlap_checker(None, Settings(OVERLAP_STRATEGY="scan")), LinearScanChecker)
    assert isinstance(get_overlap_checker(None, Settings(OVERLAP_STRATEGY="sweep")), SortedSweepChecker)
    with pytest.raises(ValueError):
        get_overlap_checker(None, Settings(OVERLAP_STRATEGY="tree"))
