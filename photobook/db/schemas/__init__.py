from .availability import DayAvailability, DayAvailabilityUpdate
from .booking import (
    Availability,
    Booking,
    BookingAssign,
    BookingCreate,
    BookingStatusUpdate,
    BookingTransitions,
    BookingUpdate,
)
from .conflict import ConflictBooking, ConflictRecord
from .payment import PaymentWebhook
