from datetime import date, datetime
from pydantic import BaseModel
from ..models.booking import BookingStatus, PackageTier, PaymentStatus


class BookingBase(BaseModel):
    photographer_id: int | None = None
    event_date: date
    start_time: str
    end_time: str
    event_type: str = "Wedding"
    event_venue: str | None = None
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    package: PackageTier = PackageTier.gold
    notes: str | None = None
    amount: float | None = None


class BookingCreate(BookingBase):
    # Only honoured for admins booking on behalf of a client
    client_id: int | None = None


class BookingUpdate(BaseModel):
    event_date: date | None = None
    start_time: str | None = None
    end_time: str | None = None
    event_type: str | None = None
    event_venue: str | None = None
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    package: PackageTier | None = None
    notes: str | None = None
    amount: float | None = None


class BookingAssign(BaseModel):
    photographer_id: int


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class Booking(BookingBase):
    id: int
    client_id: int
    status: BookingStatus
    payment_status: PaymentStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class BookingTransitions(BaseModel):
    booking_id: int
    status: BookingStatus
    allowed: list[BookingStatus]


class Availability(BaseModel):
    photographer_id: int
    event_date: date
    start_time: str
    end_time: str
    available: bool
