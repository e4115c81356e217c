from datetime import date
from pydantic import BaseModel


class ConflictBooking(BaseModel):
    id: int
    client: str | None = None
    type: str | None = None
    time: str

    class Config:
        from_attributes = True


class ConflictRecord(BaseModel):
    photographer_id: int
    photographer: str | None = None
    event_date: date
    booking_a: ConflictBooking
    booking_b: ConflictBooking
    overlaps: bool

    class Config:
        from_attributes = True
