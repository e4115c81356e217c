import os
from datetime import date, datetime, timedelta, timezone

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from photobook.api.routes import admin, bookings, payments, photographers
from photobook.config import get_settings
from photobook.core.security import ALGORITHM
from photobook.db import models
from photobook.db.session import Base, get_db
from photobook.services import availability_service, booking_service

TODAY = date(2024, 5, 1)
EVENT_DAY = date(2024, 6, 1)


@pytest.fixture(autouse=True)
def frozen_today(monkeypatch):
    monkeypatch.setattr(booking_service, "today", lambda: TODAY)
    monkeypatch.setattr(availability_service, "today", lambda: TODAY)
    return TODAY


@pytest.fixture()
def db_session():
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def create_user(session, name, role=models.UserRole.client, is_active=True):
    user = models.User(name=name, email=f"{name.lower()}@example.com", role=role, is_active=is_active)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def create_booking(
    session,
    client,
    photographer=None,
    start_time="10:00",
    end_time="12:00",
    event_date=EVENT_DAY,
    status=models.BookingStatus.pending,
    event_type="Wedding",
):
    booking = models.Booking(
        client_id=client.id,
        photographer_id=photographer.id if photographer else None,
        event_date=event_date,
        start_time=start_time,
        end_time=end_time,
        status=status,
        event_type=event_type,
    )
    session.add(booking)
    session.commit()
    session.refresh(booking)
    return booking


def auth_headers(user_id, role):
    claims = {
        "sub": str(user_id),
        "role": role,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=15),
    }
    token = jwt.encode(claims, get_settings().jwt_secret, algorithm=ALGORITHM)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def api_client():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    TestingSessionLocal = sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )
    Base.metadata.create_all(bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    test_app = FastAPI()
    for module in (bookings, photographers, admin, payments):
        test_app.include_router(module.router, prefix="/api/v1")
    test_app.dependency_overrides[get_db] = override_get_db

    with TestClient(test_app) as client:
        yield client, TestingSessionLocal

    test_app.dependency_overrides.clear()
