from datetime import date
from pydantic import BaseModel


class DayAvailabilityUpdate(BaseModel):
    event_date: date
    is_available: bool = True


class DayAvailability(DayAvailabilityUpdate):
    photographer_id: int

    class Config:
        from_attributes = True
